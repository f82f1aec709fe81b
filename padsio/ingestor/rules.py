"""
Defines PADS-specific line grammars and markers.

Each rule validates and decodes one significant line, checks it against
the builder for duplicates, and either commits the decoded record to the
builder or raises a ParserError. Rules never decide between strict and
partial handling; that belongs to the state machine.
"""

import re

from padsio.ingestor.builder import NetlistBuilder
from padsio.ingestor.scanner import SourceLine
from padsio.models.format import NetlistFormat
from padsio.models.pads import Net, Part, Pin
from padsio.models.parsing import ErrorCode, LengthPolicy, ParserError

__all__ = [
    "parse_part_line",
    "parse_net_header",
    "parse_pin_line",
    "is_known_marker",
    "SECTION_SIGIL",
    "PART_MARKER",
    "NET_MARKER",
    "SIGNAL_MARKER",
    "END_MARKER",
]

SECTION_SIGIL = "*"
PART_MARKER = "*PART*"
NET_MARKER = "*NET*"
SIGNAL_MARKER = "*SIGNAL*"
END_MARKER = "*END*"
VALUE_SEPARATOR = "@"
PIN_SEPARATOR = "."

RE_REFDES = re.compile(r"[a-z][a-z0-9]*", re.IGNORECASE | re.ASCII)
RE_FOOTPRINT = re.compile(r"[A-Za-z0-9_-]+")
RE_NET_NAME = re.compile(r"[\x21-\x7e]+")


def is_known_marker(line: str) -> bool:
    """Checks if a line starts with any marker the grammar recognises."""
    markers = (PART_MARKER, NET_MARKER, SIGNAL_MARKER, END_MARKER, *(f.marker for f in NetlistFormat))
    return line.startswith(markers)


def _fit(
    text: str,
    limit: int,
    error_code: ErrorCode,
    label: str,
    line: SourceLine,
    builder: NetlistBuilder,
) -> tuple[str, str | None]:
    """
    Applies the length policy to one identifier.

    :return: Tuple of (identifier to store, warning message or None).
    :raises ParserError: If the identifier is too long and the policy is REJECT.
    """
    if len(text) <= limit:
        return text, None
    if builder.options.length_policy is LengthPolicy.REJECT:
        raise ParserError(error_code, line.number, text)
    return text[:limit], f'{label} "{text}" too long, truncated to "{text[:limit]}"'


def _commit_warnings(builder: NetlistBuilder, line: SourceLine, *messages: str | None) -> None:
    for message in messages:
        if message:
            builder.warn(line.number, message)


def parse_part_line(line: SourceLine, builder: NetlistBuilder) -> Part:
    """
    Parses a line in the *PART* section.

    Accepts 'RefDes Footprint' and 'RefDes Value@Footprint'; the footprint
    is whatever follows the final '@'.

    :param line: Significant line from the part section.
    :param builder: Accumulator for the current parse.
    :return: The Part added to the builder.
    :raises ParserError: If the line is malformed or the refdes is a duplicate.
    """
    tokens = line.text.split(maxsplit=1)
    if len(tokens) < 2:
        raise ParserError(ErrorCode.INVALID_PART_FORMAT, line.number, line.text)
    refdes, remainder = tokens

    if not RE_REFDES.fullmatch(refdes):
        raise ParserError(ErrorCode.INVALID_PART_REFDES, line.number, refdes)
    refdes, refdes_warning = _fit(
        refdes, builder.options.max_refdes_length, ErrorCode.PART_REFDES_TOO_LONG, "Part refdes", line, builder
    )

    value, separator, footprint = remainder.rpartition(VALUE_SEPARATOR)
    if not separator:
        value = None
    if not RE_FOOTPRINT.fullmatch(footprint):
        raise ParserError(ErrorCode.INVALID_PART_FORMAT, line.number, footprint)
    footprint, footprint_warning = _fit(
        footprint,
        builder.options.max_footprint_length,
        ErrorCode.FOOTPRINT_NAME_TOO_LONG,
        "Footprint",
        line,
        builder,
    )

    if builder.has_part(refdes):
        raise ParserError(ErrorCode.DUPLICATE_PART, line.number, refdes)

    part = Part(refdes=refdes, footprint=footprint, value=value or None)
    _commit_warnings(builder, line, refdes_warning, footprint_warning)
    builder.add_part(part)
    return part


def parse_net_header(line: SourceLine, builder: NetlistBuilder) -> Net:
    """
    Parses a '*SIGNAL* NetName' header and opens the named net.

    Tokens after the net name are ignored.

    :param line: Significant line starting with the signal marker.
    :param builder: Accumulator for the current parse.
    :return: The newly opened, empty Net.
    :raises ParserError: If the header is malformed or the name is taken.
    """
    rest = line.text[len(SIGNAL_MARKER) :]
    if rest and not rest[0].isspace():
        raise ParserError(ErrorCode.INVALID_NET_FORMAT, line.number, line.text)

    tokens = rest.split()
    if not tokens:
        raise ParserError(ErrorCode.EMPTY_NET_NAME, line.number)
    name = tokens[0]
    if not RE_NET_NAME.fullmatch(name):
        raise ParserError(ErrorCode.INVALID_NET_NAME, line.number, name)
    name, name_warning = _fit(
        name, builder.options.max_net_name_length, ErrorCode.NET_NAME_TOO_LONG, "Net name", line, builder
    )

    if builder.has_net(name):
        raise ParserError(ErrorCode.DUPLICATE_NET_NAME, line.number, name)

    _commit_warnings(builder, line, name_warning)
    return builder.open_net(name)


def parse_pin_line(line: SourceLine, builder: NetlistBuilder) -> list[Pin]:
    """
    Parses a line of 'RefDes.Pin' tokens into the open net.

    Tokens are committed one at a time, so pins before a malformed token
    stay in the net.

    :param line: Significant line inside a *SIGNAL* block.
    :param builder: Accumulator with an open net.
    :return: Pins added by this line, in order.
    :raises ParserError: On a malformed token or a pin already in the net.
    """
    added = []
    for token in line.text.split():
        halves = token.split(PIN_SEPARATOR)
        if len(halves) != 2 or not all(halves):
            raise ParserError(ErrorCode.INVALID_PIN_FORMAT, line.number, token)
        refdes, pin_name = halves
        refdes, refdes_warning = _fit(
            refdes, builder.options.max_refdes_length, ErrorCode.PIN_REFDES_TOO_LONG, "Pin refdes", line, builder
        )
        pin_name, pin_warning = _fit(
            pin_name, builder.options.max_pin_name_length, ErrorCode.PIN_NAME_TOO_LONG, "Pin name", line, builder
        )

        if builder.has_pin(refdes, pin_name):
            raise ParserError(ErrorCode.DUPLICATE_PIN, line.number, f"{refdes}{PIN_SEPARATOR}{pin_name}")

        pin = Pin(refdes=refdes, pin=pin_name)
        _commit_warnings(builder, line, refdes_warning, pin_warning)
        builder.add_pin(pin)
        added.append(pin)
    return added
