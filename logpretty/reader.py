"""Line iteration over a text stream."""

from typing import Generator, TextIO


def read_lines(stream: TextIO) -> Generator[str, None, None]:
    """Yield each line of stream with surrounding whitespace removed.

    Stops at end of input. Read errors propagate to the caller.
    """
    while True:
        line = stream.readline()
        if not line:
            return
        yield line.strip()
