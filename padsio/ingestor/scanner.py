"""Line classifier for PADS netlist text.

Turns a document into significant lines tagged with their physical
1-indexed line numbers, dropping blank and comment lines.
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple

__all__ = ["SourceLine", "LineClassifier", "PADS_COMMENT_PREFIX"]

PADS_COMMENT_PREFIX = "//"
_LINE_SEPARATOR = "\n"


class SourceLine(NamedTuple):
    """A significant line and the physical line number it came from."""

    number: int
    text: str


@dataclass(slots=True)
class LineClassifier:
    """
    Iterates over the significant lines of a document.

    Every physical line is counted, including skipped ones, so that
    reported line numbers match the original text. Iteration is lazy and
    single-pass; ``current_line_number`` holds the last physical line read,
    which after exhaustion is the total line count.

    :param text: Complete document text, lines separated by line feeds.
    :param comment_prefix: Prefix marking a comment line.
    """

    text: str
    comment_prefix: str = PADS_COMMENT_PREFIX
    current_line_number: int = 0

    def _is_comment(self, line: str) -> bool:
        return line.startswith(self.comment_prefix)

    def _physical_lines(self) -> Iterator[str]:
        start = 0
        while True:
            end = self.text.find(_LINE_SEPARATOR, start)
            if end == -1:
                yield self.text[start:]
                return
            yield self.text[start:end]
            start = end + 1

    def __iter__(self) -> Iterator[SourceLine]:
        for raw in self._physical_lines():
            self.current_line_number += 1
            line = raw.strip()
            if not line or self._is_comment(line):
                continue
            yield SourceLine(self.current_line_number, line)
