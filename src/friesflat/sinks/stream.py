"""JSON-lines sink writing tuples to a text stream."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class StreamSink:
    """Write each tuple as one line of JSON, e.g. for a dry run."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def submit(self, text: str) -> bool:
        self.stream.write(text)
        self.stream.write("\n")
        return True

    def close(self) -> None:
        self.stream.flush()


__all__ = ["StreamSink"]
