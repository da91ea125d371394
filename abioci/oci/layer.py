from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from abioci.oci.bundle import Bundler, Payload, tar_gzip_bundle
from abioci.oci.defaults import ANNOTATION_TITLE
from abioci.oci.descriptor import Descriptor


class Layer(Descriptor):
    @classmethod
    def from_payload(cls, payload: Payload, media_type: str) -> "Layer":
        """Create a new layer containing a single payload, titled by its name"""
        return cls.from_bytes(
            payload.data,
            media_type=media_type,
            annotations={ANNOTATION_TITLE: payload.name},
        )

    @classmethod
    def from_bundle(
        cls,
        payloads: Sequence[Payload],
        media_type: str,
        bundler: Bundler = tar_gzip_bundle,
    ) -> "Layer":
        """Create a new layer containing all payloads combined by `bundler`"""
        return cls.from_bytes(bundler(payloads), media_type=media_type)


def item_layers(
    payloads: Sequence[Payload], media_type: str, max_workers: int | None = None
) -> list[Layer]:
    """Create one layer per payload, in the order of `payloads`"""
    if not max_workers or max_workers < 2 or len(payloads) < 2:
        return [Layer.from_payload(p, media_type) for p in payloads]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        # map() yields results in submission order
        return list(pool.map(lambda p: Layer.from_payload(p, media_type), payloads))
