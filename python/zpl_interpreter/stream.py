"""Seekable byte cursor over a binary input source."""

from __future__ import annotations

import io
from typing import BinaryIO

from .errors import StreamError


class Stream:
    """Single byte reader with lookahead over a seekable binary resource.

    The stream owns the resource: :meth:`close` (or leaving a ``with`` block)
    closes it. Both :meth:`peek` and :meth:`reset` rely on the resource
    supporting random access, which is checked at construction.
    """

    def __init__(self, resource: BinaryIO) -> None:
        self._resource = resource
        self._stream_end = False
        try:
            if not resource.seekable():
                raise StreamError("Unable to get stream length: stream is not seekable")
            start = resource.tell()
            self._size = resource.seek(0, io.SEEK_END)
            resource.seek(start, io.SEEK_SET)
        except StreamError:
            resource.close()
            raise
        except (OSError, ValueError) as exc:
            resource.close()
            raise StreamError(f"Unable to get stream length: {exc}") from exc

    def __enter__(self) -> "Stream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def size(self) -> int:
        return self._size

    @property
    def at_end(self) -> bool:
        return self._stream_end

    @property
    def closed(self) -> bool:
        return self._resource.closed

    @property
    def position(self) -> int:
        try:
            return self._resource.tell()
        except (OSError, ValueError) as exc:
            raise StreamError(
                "Unable to read current stream position. Ensure your stream is seekable"
            ) from exc

    def next(self) -> bytes:
        """Return the next byte and advance, or ``b""`` at end of input."""

        position = self.position
        if position + 1 > self._size:
            self._stream_end = True
            return b""

        try:
            char = self._resource.read(1)
        except (OSError, ValueError) as exc:
            raise StreamError(f"Unable to read stream at position {position}") from exc
        if not char:
            raise StreamError(f"Unexpected end of stream at position {position} of {self._size}")
        return char

    def peek(self) -> bytes:
        """Return the next byte without moving the position."""

        char = self.next()
        if not self._stream_end:
            self.seek(-1)
        return char

    def seek(self, move_by: int) -> None:
        """Move the position relative to the current one."""

        try:
            self._resource.seek(move_by, io.SEEK_CUR)
        except (OSError, ValueError) as exc:
            raise StreamError(f"Unable to seek stream by {move_by}") from exc

    def reset(self) -> None:
        """Rewind to the start of the stream."""

        self._stream_end = False
        try:
            self._resource.seek(0, io.SEEK_SET)
        except (OSError, ValueError) as exc:
            raise StreamError("Unable to rewind stream") from exc

    def close(self) -> None:
        if not self._resource.closed:
            self._resource.close()
