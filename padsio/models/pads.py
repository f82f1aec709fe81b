"""Defines the PADS netlist data structures.

Provides the part, pin, net and netlist records produced by the parser.
"""

from dataclasses import dataclass, field

from padsio.models.format import NetlistFormat
from padsio.models.parsing import ParserError, ParseWarning

__all__ = ["Part", "Pin", "Net", "Netlist"]


@dataclass(slots=True, frozen=True)
class Part:
    """
    Represents one component declared in the *PART* section.

    :param refdes: Reference designator, unique within the document.
    :param footprint: Physical package name.
    :param value: Electrical value, present only for 'value@footprint' lines.
    """

    refdes: str
    footprint: str
    value: str | None = None


@dataclass(slots=True, frozen=True)
class Pin:
    """
    Represents one terminal of one part, written 'refdes.pin'.

    :param refdes: Reference designator of the owning part.
    :param pin: Pin number or name.
    """

    refdes: str
    pin: str

    def __str__(self) -> str:
        return f"{self.refdes}.{self.pin}"


@dataclass(slots=True)
class Net:
    """
    Represents a named electrical connection.

    :param name: Net name, unique within the document.
    :param pins: Connected pins in declaration order.
    """

    name: str
    pins: list[Pin] = field(default_factory=list)


@dataclass(slots=True)
class Netlist:
    """
    Top-level parse result.

    :param parts: Declared parts in declaration order.
    :param nets: Non-empty nets in declaration order.
    :param errors: Errors recorded in partial mode.
    :param warnings: Non-fatal input-quality events such as truncations.
    :param format: Header variant the document declared, if any.
    :param case_sensitive: Whether refdes and net names compare exactly or casefolded.
    """

    parts: list[Part] = field(default_factory=list)
    nets: list[Net] = field(default_factory=list)
    errors: list[ParserError] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    format: NetlistFormat | None = None
    case_sensitive: bool = True

    def _key(self, name: str) -> str:
        return name if self.case_sensitive else name.casefold()

    @property
    def ok(self) -> bool:
        return not self.errors

    def get_part(self, refdes: str) -> Part | None:
        return next((part for part in self.parts if self._key(part.refdes) == self._key(refdes)), None)

    def get_net(self, name: str) -> Net | None:
        return next((net for net in self.nets if self._key(net.name) == self._key(name)), None)

    def dangling_pins(self) -> list[tuple[str, Pin]]:
        """
        Lists pins whose reference designator is not declared as a part.

        The grammar accepts such pins; this lets callers audit them afterwards.

        :return: (net name, pin) pairs in declaration order.
        """
        declared = {self._key(part.refdes) for part in self.parts}
        return [(net.name, pin) for net in self.nets for pin in net.pins if self._key(pin.refdes) not in declared]
