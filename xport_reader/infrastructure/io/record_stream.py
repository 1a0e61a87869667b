from __future__ import annotations

from typing import BinaryIO


class RecordStream:
    """Forward-only view over a binary stream that counts consumed bytes.

    Short reads are reported as return values (None / a short count), never as
    exceptions, so callers decide whether an early end is normal. Bytes taken
    by :meth:`peek` are held in a pending buffer and served by the next reads,
    so lookahead works on pipes and sockets as well as on files.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pending = bytearray()
        self.consumed = 0

    def _take_pending(self, size: int) -> bytes:
        data = bytes(self._pending[:size])
        del self._pending[:size]
        return data

    def read_exact(self, size: int) -> bytes | None:
        data = self._take_pending(size)
        if len(data) < size:
            data += self._stream.read(size - len(data))
        self.consumed += len(data)
        if len(data) != size:
            return None
        return data

    def read_into(self, buffer: bytearray | memoryview) -> int:
        view = memoryview(buffer)
        head = self._take_pending(len(view))
        view[: len(head)] = head
        filled = len(head)
        while filled < len(view):
            count = self._stream.readinto(view[filled:])
            if not count:
                break
            filled += count
        self.consumed += filled
        return filled

    def discard(self, size: int) -> bool:
        return self.read_exact(size) is not None

    def peek(self, size: int) -> bytes:
        """Return up to ``size`` upcoming bytes without consuming them.

        Fewer than ``size`` bytes means the stream ends inside the window.
        """
        while len(self._pending) < size:
            chunk = self._stream.read(size - len(self._pending))
            if not chunk:
                break
            self._pending += chunk
        return bytes(self._pending[:size])
