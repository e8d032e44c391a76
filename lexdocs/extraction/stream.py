from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import BinaryIO

ByteSource = BinaryIO | Iterable[bytes | str]


@dataclass(frozen=True)
class UploadedFile:
    """A named upload whose byte stream is opened only when extraction starts."""

    filename: str
    mimetype: str | None
    open_stream: Callable[[], ByteSource]


def read_bytes(stream: ByteSource) -> bytes:
    """Consume a file-like object or an iterable of chunks into one buffer."""
    read = getattr(stream, "read", None)
    if callable(read):
        data = read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)

    chunks: list[bytes] = []
    for chunk in stream:
        chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk))
    return b"".join(chunks)


def read_text(stream: ByteSource, encoding: str = "utf-8") -> str:
    """Materialize the stream and decode it, replacing undecodable bytes."""
    return read_bytes(stream).decode(encoding, errors="replace")
