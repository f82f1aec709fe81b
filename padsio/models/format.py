"""Defines the supported PADS netlist header variants."""

from enum import Enum

__all__ = ["NetlistFormat"]


class NetlistFormat(Enum):
    """Enumeration of recognised document headers."""

    PADS_PCB = "*PADS-PCB*"
    PADS2000 = "*PADS2000*"

    @property
    def marker(self) -> str:
        return self.value

    @classmethod
    def from_header(cls, line: str) -> "NetlistFormat | None":
        """
        Matches a document header by prefix.

        :param line: Trimmed source line.
        :return: The matching format, or None if the line is not a header.
        """
        for netlist_format in cls:
            if line.startswith(netlist_format.marker):
                return netlist_format
        return None
