"""Logical line reader over a binary stream, with one line of lookahead"""

from typing import BinaryIO, Iterator, Optional


_EMPTY = object()


class LineReader:
    """Read newline-delimited logical lines from a binary stream.

    The stream is consumed in fragments of at most ``chunk_size`` bytes; a
    fragment without a trailing newline is merged with the ones after it so
    callers always receive a whole line. Trailing ``\\n`` or ``\\r\\n`` is
    stripped. ``read_line`` returns None once the stream is exhausted; a final
    unterminated line is still returned first.
    """

    def __init__(self, stream: BinaryIO, chunk_size: int = 4096):
        self._stream = stream
        self._chunk_size = chunk_size
        self._peeked = _EMPTY

    def _read_physical(self) -> Optional[bytes]:
        fragments = []
        while True:
            fragment = self._stream.readline(self._chunk_size)
            if not fragment:
                break
            fragments.append(fragment)
            if fragment.endswith(b"\n"):
                break

        if not fragments:
            return None

        line = b"".join(fragments)
        if line.endswith(b"\n"):
            line = line[:-1]
            if line.endswith(b"\r"):
                line = line[:-1]
        return line

    def read_line(self) -> Optional[bytes]:
        """Return the next logical line without its newline, or None at end of stream."""
        if self._peeked is not _EMPTY:
            line, self._peeked = self._peeked, _EMPTY
            return line
        return self._read_physical()

    def peek_is_blank(self) -> bool:
        """Return True if the next line exists and is blank, without consuming it."""
        if self._peeked is _EMPTY:
            self._peeked = self._read_physical()
        return self._peeked is not None and not self._peeked.strip()

    def skip_next_blank_line(self) -> bool:
        """Consume the next line if it is blank. Returns whether a line was skipped."""
        if not self.peek_is_blank():
            return False
        self._peeked = _EMPTY
        return True

    def __iter__(self) -> Iterator[bytes]:
        while (line := self.read_line()) is not None:
            yield line
