import gzip
import io
import tarfile
from dataclasses import dataclass
from typing import Callable, Sequence


@dataclass(frozen=True, slots=True)
class Payload:
    """A named blob of bytes, usually the content of a single file"""

    name: str
    data: bytes = b""

    def __repr__(self):
        return f"Payload(name={self.name!r}, size={len(self.data)})"


Bundler = Callable[[Sequence[Payload]], bytes]


def tar_gzip_bundle(payloads: Sequence[Payload]) -> bytes:
    """Combine all payloads into a single gzipped tar archive

    Members are written in the order given.
    All metadata that could vary between runs is zeroed,
    so identical payloads always result in identical bytes.
    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w", format=tarfile.PAX_FORMAT) as tar:
        for payload in payloads:
            info = tarfile.TarInfo(name=payload.name)
            info.size = len(payload.data)
            info.mtime = 0
            info.mode = 0o644
            info.uid = info.gid = 0
            info.uname = info.gname = ""
            tar.addfile(info, io.BytesIO(payload.data))
    # Set mtime to 0 to ensure the digest does not change if the content does not change
    return gzip.compress(buffer.getvalue(), mtime=0)
