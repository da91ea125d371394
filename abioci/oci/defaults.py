"""Media types and well-known values used when building artifact manifests.

ref: https://github.com/opencontainers/image-spec/blob/main/manifest.md
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

MANIFEST_MEDIA_TYPE: Final[str] = "application/vnd.oci.image.manifest.v1+json"
SCHEMA_VERSION: Final[int] = 2

# ref: https://github.com/opencontainers/image-spec/blob/main/manifest.md#guidance-for-an-empty-descriptor
EMPTY_MEDIA_TYPE: Final[str] = "application/vnd.oci.empty.v1+json"
EMPTY_JSON: Final[bytes] = b"{}"
EMPTY_DIGEST: Final[str] = (
    "sha256:44136fa355b3678a1146ad16f7e8649e94fb4fc21fe77e8310c060f61caaff8a"
)
EMPTY_SIZE: Final[int] = 2

# Digest of zero bytes, not to be confused with EMPTY_DIGEST
EMPTY_BLOB_DIGEST: Final[str] = (
    "sha256:e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
)

ANNOTATION_TITLE: Final[str] = "org.opencontainers.image.title"


@dataclass(frozen=True, slots=True)
class MediaTypes:
    """Media types describing one kind of artifact"""

    artifact: str
    bundle_layer: str
    bundle_config: str
    item: str


SOLIDITY_ABI: Final[MediaTypes] = MediaTypes(
    artifact="application/vnd.solidity.abi",
    bundle_layer="application/vnd.solidity.abi.layer.v1+tar+gzip",
    bundle_config="application/vnd.solidity.abi.config.v1+tar+gzip",
    item="application/vnd.solidity.abi.file",
)

GIT_SUBMODULES: Final[MediaTypes] = MediaTypes(
    artifact="application/vnd.example.git-submodules",
    bundle_layer="application/vnd.example.git-submodules.layer.v1+tar+gzip",
    bundle_config="application/vnd.example.git-submodules.config.v1+tar+gzip",
    item="application/vnd.example.git-submodule.layer.v1+json",
)

ARTIFACT_KINDS: Final[Mapping[str, MediaTypes]] = MappingProxyType(
    {
        "abi": SOLIDITY_ABI,
        "submodules": GIT_SUBMODULES,
    }
)
