"""Packaging strategies for building an artifact manifest.

A: empty config, all payloads bundled into a single layer.
B: all payloads bundled into the config, no layers.
C: empty config, one layer per payload titled by the payload name.
D: any of the above with a `subject` pointing at an existing manifest.
"""
import enum
import logging
from typing import Sequence

from abioci.oci.bundle import Bundler, Payload, tar_gzip_bundle
from abioci.oci.config import EmptyConfig
from abioci.oci.defaults import SOLIDITY_ABI, MediaTypes
from abioci.oci.descriptor import Descriptor
from abioci.oci.layer import Layer, item_layers
from abioci.oci.manifest import Manifest

logger = logging.getLogger(__name__)


class BuildError(ValueError):
    """Raised when a manifest can not be built from the given input."""

    def __init__(self, message: str, strategy=None, field: str | None = None):
        super().__init__(message)
        self.strategy = strategy
        self.field = field


class EmptyInputError(BuildError):
    """Raised when there are no payloads to build a manifest from."""


class MissingSubjectError(BuildError):
    """Raised when a subject is required but not provided."""


class InvalidStrategyError(BuildError):
    """Raised for an unknown strategy selector."""


class Strategy(str, enum.Enum):
    SINGLE_LAYER = "A"
    CONFIG = "B"
    PER_ITEM = "C"
    SUBJECT = "D"

    @classmethod
    def parse(cls, value: "str | Strategy") -> "Strategy":
        """Parse a strategy from its letter or name, case insensitive"""
        if isinstance(value, cls):
            return value
        selector = str(value).strip().upper()
        for strategy in cls:
            if selector in (strategy.value, strategy.name):
                return strategy
        raise InvalidStrategyError(
            f"Invalid strategy '{value}', expected one of "
            f"{', '.join(s.value for s in cls)}",
            field="strategy",
        )


def with_subject(manifest: Manifest, subject: Descriptor) -> Manifest:
    """Return a copy of `manifest` referring to `subject`"""
    return manifest.model_copy(update={"subject": subject})


def build(
    strategy: str | Strategy,
    payloads: Sequence[Payload],
    media_types: MediaTypes = SOLIDITY_ABI,
    artifact_type: str | None = None,
    subject: Descriptor | None = None,
    base: str | Strategy = Strategy.SINGLE_LAYER,
    bundler: Bundler = tar_gzip_bundle,
    max_workers: int | None = None,
) -> Manifest:
    """Build a manifest for `payloads` using `strategy`

    :param strategy: The packaging strategy, see `Strategy`.
    :param payloads: The named payloads, their order is kept.
    :param media_types: The media types for the kind of artifact.
    :param artifact_type: Overrides `media_types.artifact`.
    :param subject: The manifest to refer to, required by and only allowed for
        `Strategy.SUBJECT`.
    :param base: The strategy wrapped by `Strategy.SUBJECT`.
    :param bundler: Combines payloads into one blob for A and B.
    :param max_workers: Digest payloads in parallel for C.
    """
    strategy = Strategy.parse(strategy)
    payloads = list(payloads)
    if not payloads:
        raise EmptyInputError(
            "No payloads to build a manifest from", strategy=strategy, field="payloads"
        )
    artifact_type = artifact_type or media_types.artifact

    if strategy is Strategy.SUBJECT:
        if subject is None:
            raise MissingSubjectError(
                "Strategy D requires a subject", strategy=strategy, field="subject"
            )
        base = Strategy.parse(base)
        if base is Strategy.SUBJECT:
            raise InvalidStrategyError(
                "Strategy D can not wrap itself", strategy=strategy, field="base"
            )
        manifest = build(
            base,
            payloads,
            media_types=media_types,
            artifact_type=artifact_type,
            bundler=bundler,
            max_workers=max_workers,
        )
        logger.info("Attaching subject %s", subject.digest)
        return with_subject(manifest, subject)

    if subject is not None:
        raise BuildError(
            f"Strategy {strategy.value} does not take a subject, use strategy D",
            strategy=strategy,
            field="subject",
        )

    logger.info(
        "Building %s manifest for %d payload(s) with strategy %s",
        artifact_type,
        len(payloads),
        strategy.name,
    )
    if strategy is Strategy.SINGLE_LAYER:
        config = EmptyConfig()
        layers = [Layer.from_bundle(payloads, media_types.bundle_layer, bundler)]
    elif strategy is Strategy.CONFIG:
        config = Descriptor.from_bytes(
            bundler(payloads), media_type=media_types.bundle_config
        )
        layers = []
    else:
        config = EmptyConfig()
        layers = item_layers(payloads, media_types.item, max_workers=max_workers)

    logger.debug("config: %s %s (%d)", config.mediaType, config.digest, config.size)
    for layer in layers:
        logger.debug("layer: %s %s (%d)", layer.mediaType, layer.digest, layer.size)

    return Manifest(artifactType=artifact_type, config=config, layers=layers)
