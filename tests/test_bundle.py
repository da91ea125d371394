import gzip
import io
import tarfile

from abioci.oci import Payload, tar_gzip_bundle


def test_bundle_contents(payloads):
    bundle = tar_gzip_bundle(payloads)
    with tarfile.open(fileobj=io.BytesIO(bundle), mode="r:gz") as tar:
        members = tar.getmembers()
        assert [m.name for m in members] == ["A.abi", "B.abi"]
        assert all(m.mtime == 0 for m in members)
        assert tar.extractfile("A.abi").read() == b"a" * 100
        assert tar.extractfile("B.abi").read() == b"b" * 200


def test_bundle_is_deterministic(payloads):
    assert tar_gzip_bundle(payloads) == tar_gzip_bundle(list(payloads))


def test_bundle_depends_on_order(payloads):
    assert tar_gzip_bundle(payloads) != tar_gzip_bundle(payloads[::-1])


def test_bundle_gzip_header_has_no_timestamp(payloads):
    bundle = tar_gzip_bundle(payloads)
    # Bytes 4-7 of the gzip header hold the mtime
    assert bundle[4:8] == b"\x00\x00\x00\x00"
    assert gzip.decompress(bundle)


def test_bundle_empty_payload():
    bundle = tar_gzip_bundle([Payload("empty.abi")])
    with tarfile.open(fileobj=io.BytesIO(bundle), mode="r:gz") as tar:
        assert tar.extractfile("empty.abi").read() == b""
