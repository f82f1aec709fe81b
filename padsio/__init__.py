"""
PadsIO: PADS-PCB netlist parser.

Parses PADS-PCB / PADS2000 ASCII netlists into typed parts and nets,
with strict (fail-fast) and partial (collect-errors) modes.
"""

from padsio.ingestor.parser import PadsParser, parse, parse_async
from padsio.ingestor.reader import read_netlist
from padsio.models.format import NetlistFormat
from padsio.models.pads import Net, Netlist, Part, Pin
from padsio.models.parsing import ErrorCode, LengthPolicy, ParseMode, ParserError, ParserOptions, ParseWarning

__all__ = [
    "parse",
    "parse_async",
    "read_netlist",
    "PadsParser",
    "NetlistFormat",
    "Part",
    "Pin",
    "Net",
    "Netlist",
    "ErrorCode",
    "ParserError",
    "ParseWarning",
    "ParseMode",
    "LengthPolicy",
    "ParserOptions",
]
