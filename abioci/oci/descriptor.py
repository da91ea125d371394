from hashlib import sha256

from pydantic import BaseModel, Field

# ref: https://github.com/opencontainers/image-spec/blob/main/descriptor.md#digests
DIGEST_PATTERN = r"^[a-z0-9]+(?:[+._-][a-z0-9]+)*:[a-zA-Z0-9=_-]+$"


class DigestMismatchError(ValueError):
    """Raised when bytes do not match the digest or size of a descriptor."""


def address_of(data: bytes) -> tuple[str, int]:
    """Return the content address of `data` as a (digest, size) pair"""
    return f"sha256:{sha256(data).hexdigest()}", len(data)


class Descriptor(BaseModel):
    """
    ref: https://github.com/opencontainers/image-spec/blob/main/descriptor.md
    """

    mediaType: str
    digest: str = Field(pattern=DIGEST_PATTERN)
    size: int = Field(ge=0)
    urls: list[str] | None = None
    annotations: dict[str, str] | None = None
    artifactType: str | None = None
    data: bytes | None = Field(exclude=True, default=None, repr=False)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        media_type: str,
        annotations: dict[str, str] | None = None,
    ) -> "Descriptor":
        """Create a descriptor addressing `data`"""
        digest, size = address_of(data)
        return cls(
            mediaType=media_type,
            digest=digest,
            size=size,
            annotations=annotations,
            data=data,
        )

    @property
    def hexdigest(self) -> str:
        return self.digest.split(":", 1)[1]

    def verify(self, data: bytes):
        """Check `data` is the blob this descriptor references"""
        digest, size = address_of(data)
        if size != self.size:
            raise DigestMismatchError(f"Invalid size. {self.size} != {size}")
        if digest != self.digest:
            raise DigestMismatchError(f"Invalid checksum. {self.digest} != {digest}")
