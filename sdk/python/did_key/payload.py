"""Message payloads for signing and verification."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from did_key.errors import UnsupportedPayloadError

BytesLike = bytes | bytearray | memoryview


@dataclass(frozen=True, slots=True)
class Payload:
    """A single buffer, or an ordered sequence of buffers.

    The sequence form is reserved for algorithms that sign several
    messages at once. Single-buffer algorithms reject it.
    """

    buffers: tuple[bytes, ...]
    is_array: bool = False

    @classmethod
    def buffer(cls, data: BytesLike) -> Payload:
        return cls(buffers=(bytes(data),))

    @classmethod
    def buffer_array(cls, items: Sequence[BytesLike]) -> Payload:
        return cls(buffers=tuple(bytes(item) for item in items), is_array=True)

    @classmethod
    def coerce(cls, value: Payload | BytesLike | Sequence[BytesLike]) -> Payload:
        """Build a payload from bytes, a list of bytes, or a payload."""
        if isinstance(value, Payload):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.buffer(value)
        if isinstance(value, (list, tuple)):
            return cls.buffer_array(value)
        raise TypeError(f"unsupported payload type: {type(value).__name__}")

    def single(self) -> bytes:
        """Get the single buffer.

        Raises:
            UnsupportedPayloadError: If this is a buffer array.
        """
        if self.is_array:
            raise UnsupportedPayloadError("payload type not supported for this key")
        return self.buffers[0]
