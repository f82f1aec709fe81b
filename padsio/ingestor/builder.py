"""
Mutable result builder threaded through a single parse pass.

Holds the growing part and net lists plus the lookup keys used for
duplicate detection, so grammar rules can validate against everything
built so far without shared object state.
"""

import logging
from dataclasses import dataclass, field

from padsio.models.format import NetlistFormat
from padsio.models.pads import Net, Netlist, Part, Pin
from padsio.models.parsing import ParserError, ParserOptions, ParseWarning

__all__ = ["NetlistBuilder"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NetlistBuilder:
    """
    Accumulates parts, nets, errors and warnings for one parse call.

    :param options: Options of the owning parse call.
    :param current_net: Net currently open and accepting pin lines.
    """

    options: ParserOptions = field(default_factory=ParserOptions)
    format: NetlistFormat | None = None
    parts: list[Part] = field(default_factory=list)
    nets: list[Net] = field(default_factory=list)
    errors: list[ParserError] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    current_net: Net | None = None
    _part_keys: set[str] = field(default_factory=set)
    _net_keys: set[str] = field(default_factory=set)
    _pin_keys: set[tuple[str, str]] = field(default_factory=set)

    def has_part(self, refdes: str) -> bool:
        return self.options.name_key(refdes) in self._part_keys

    def add_part(self, part: Part) -> None:
        self._part_keys.add(self.options.name_key(part.refdes))
        self.parts.append(part)

    def has_net(self, name: str) -> bool:
        return self.options.name_key(name) in self._net_keys

    def open_net(self, name: str) -> Net:
        self.close_net()
        self.current_net = Net(name=name)
        return self.current_net

    def close_net(self) -> None:
        """Closes the open net, keeping it only if it has pins."""
        net, self.current_net = self.current_net, None
        self._pin_keys = set()
        if net is None:
            return
        if not net.pins:
            logger.debug("Dropping net %r with no pins", net.name)
            return
        self._net_keys.add(self.options.name_key(net.name))
        self.nets.append(net)

    def has_pin(self, refdes: str, pin: str) -> bool:
        return (self.options.name_key(refdes), self.options.name_key(pin)) in self._pin_keys

    def add_pin(self, pin: Pin) -> None:
        if self.current_net is None:
            raise RuntimeError("No open net to add a pin to")
        self._pin_keys.add((self.options.name_key(pin.refdes), self.options.name_key(pin.pin)))
        self.current_net.pins.append(pin)

    def record_error(self, error: ParserError) -> None:
        logger.debug("Recorded %s at line %d: %s", error.code, error.line, error.message)
        self.errors.append(error)

    def warn(self, line: int, message: str) -> None:
        logger.warning("%s (line %d)", message, line)
        self.warnings.append(ParseWarning(line=line, message=message))

    def build(self) -> Netlist:
        return Netlist(
            parts=list(self.parts),
            nets=list(self.nets),
            errors=list(self.errors),
            warnings=list(self.warnings),
            format=self.format,
            case_sensitive=self.options.case_sensitive,
        )
