import logging
from pathlib import Path
from typing import Iterator, Literal

from pydantic import BaseModel

from abioci.oci.defaults import MANIFEST_MEDIA_TYPE, SCHEMA_VERSION
from abioci.oci.descriptor import Descriptor
from abioci.oci.layer import Layer

logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"


class Manifest(BaseModel):
    """
    ref: https://github.com/opencontainers/image-spec/blob/main/manifest.md
    """

    schemaVersion: Literal[SCHEMA_VERSION] = SCHEMA_VERSION
    mediaType: Literal[MANIFEST_MEDIA_TYPE] = MANIFEST_MEDIA_TYPE
    artifactType: str | None = None
    config: Descriptor
    layers: list[Layer] = []
    subject: Descriptor | None = None
    annotations: dict[str, str] | None = None

    def json(self) -> str:
        return self.model_dump_json(exclude_none=True, indent=2)

    @classmethod
    def from_json(cls, data: str | bytes) -> "Manifest":
        return cls.model_validate_json(data)

    @property
    def descriptor(self) -> Descriptor:
        """Descriptor of the serialized manifest, for use as another manifest's subject"""
        return Descriptor.from_bytes(
            self.json().encode("utf-8"), media_type=self.mediaType
        )

    def blobs(self) -> Iterator[Descriptor]:
        """Yield the descriptors of all blobs this manifest carries the content for"""
        for descriptor in [self.config, *self.layers]:
            if descriptor.data is not None:
                yield descriptor

    def dump(self, path: Path) -> Path:
        """Write all blobs and the manifest itself to `path`

        Blobs are stored by digest under `blobs/<algorithm>/<hex>`
        the same way an OCI image layout does.
        """
        path.mkdir(parents=True, exist_ok=True)
        for blob in self.blobs():
            algorithm = blob.digest.split(":", 1)[0]
            (path / "blobs" / algorithm).mkdir(parents=True, exist_ok=True)
            blob_path = path / "blobs" / algorithm / blob.hexdigest
            logger.debug("Writing blob %s", blob_path)
            blob_path.write_bytes(blob.data)
        manifest_path = path / MANIFEST_FILE
        manifest_path.write_text(self.json(), encoding="utf-8")
        return manifest_path
