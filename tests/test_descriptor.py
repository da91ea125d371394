from hashlib import sha256

import pytest
from pydantic import ValidationError

from abioci.oci import DigestMismatchError, Descriptor, EmptyConfig, address_of
from abioci.oci.defaults import (
    EMPTY_BLOB_DIGEST,
    EMPTY_DIGEST,
    EMPTY_JSON,
    EMPTY_MEDIA_TYPE,
)


@pytest.mark.parametrize("data", [b"", b"{}", b"hello world", bytes(range(256)) * 4])
def test_address_of(data):
    digest, size = address_of(data)
    assert digest == f"sha256:{sha256(data).hexdigest()}"
    assert size == len(data)
    assert address_of(data) == (digest, size)


def test_address_of_distinct_content():
    assert address_of(b"abc")[0] != address_of(b"abd")[0]
    assert address_of(b"abc")[0] == address_of(bytes(b"abc"))[0]


def test_empty_bytes_is_not_empty_descriptor():
    digest, size = address_of(b"")
    assert digest == EMPTY_BLOB_DIGEST
    assert size == 0
    assert digest != EMPTY_DIGEST


def test_empty_config():
    config = EmptyConfig()
    assert config.mediaType == EMPTY_MEDIA_TYPE
    assert config.digest == EMPTY_DIGEST
    assert config.size == 2
    assert config.data == EMPTY_JSON
    # The constant must match the real bytes
    assert address_of(EMPTY_JSON) == (EMPTY_DIGEST, 2)
    config.verify(EMPTY_JSON)


def test_from_bytes():
    descriptor = Descriptor.from_bytes(
        b"content", media_type="text/plain", annotations={"key": "value"}
    )
    assert descriptor.size == 7
    assert descriptor.data == b"content"
    assert descriptor.hexdigest == sha256(b"content").hexdigest()
    assert descriptor.annotations == {"key": "value"}
    descriptor.verify(b"content")


def test_data_is_not_serialized():
    descriptor = Descriptor.from_bytes(b"content", media_type="text/plain")
    dumped = descriptor.model_dump(exclude_none=True)
    assert dumped == {
        "mediaType": "text/plain",
        "digest": descriptor.digest,
        "size": 7,
    }


@pytest.mark.parametrize("data", [b"Content", b"content!", b""])
def test_verify_mismatch(data):
    descriptor = Descriptor.from_bytes(b"content", media_type="text/plain")
    with pytest.raises(DigestMismatchError):
        descriptor.verify(data)


@pytest.mark.parametrize(
    "digest,size",
    [
        ("44136fa355b3678a1146ad16f7e8649e94fb4fc21fe77e8310c060f61caaff8a", 2),
        ("sha256:", 2),
        ("SHA256:abc", 2),
        (EMPTY_DIGEST, -1),
    ],
)
def test_invalid_descriptor(digest, size):
    with pytest.raises(ValidationError):
        Descriptor(mediaType="text/plain", digest=digest, size=size)
