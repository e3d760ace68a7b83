"""Line splitter module.

This module contains the LineSplitter class, which turns the raw byte chunks
read from a child's stdout into complete text lines.
"""

import codecs


class LineSplitter:
    """Incremental UTF-8 decoder and newline splitter.

    Chunk boundaries do not line up with line boundaries: the text after the
    last newline of a chunk is held back and prepended to the next chunk, and
    multi-byte characters split across chunks are decoded once complete.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline, not yet emitted."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        """Add a chunk and return every line it completes."""
        self._buffer += self._decoder.decode(chunk)
        if "\n" not in self._buffer:
            return []
        *lines, self._buffer = self._buffer.split("\n")
        return [_strip_cr(line) for line in lines]

    def flush(self) -> list[str]:
        """Return the undelimited final fragment at end of stream, if any."""
        self._buffer += self._decoder.decode(b"", final=True)
        remainder, self._buffer = self._buffer, ""
        if not remainder:
            return []
        return [_strip_cr(remainder)]


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line
