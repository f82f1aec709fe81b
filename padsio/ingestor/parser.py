"""
Defines the PADS netlist parsing engine.

A finite state machine walks the classified lines of a document once,
dispatching each line to the grammar rule for the current section. A
single policy method decides whether a rule failure aborts the parse
(strict mode) or is recorded before moving on (partial mode).
"""

from __future__ import annotations

import dataclasses
from enum import Enum, auto

from padsio.ingestor.builder import NetlistBuilder
from padsio.ingestor.rules import (
    END_MARKER,
    NET_MARKER,
    PART_MARKER,
    SECTION_SIGIL,
    SIGNAL_MARKER,
    is_known_marker,
    parse_net_header,
    parse_part_line,
    parse_pin_line,
)
from padsio.ingestor.scanner import LineClassifier, SourceLine
from padsio.models.format import NetlistFormat
from padsio.models.pads import Netlist
from padsio.models.parsing import ErrorCode, ParseMode, ParserError, ParserOptions

__all__ = ["ParserState", "PadsParser", "parse", "parse_async"]


class ParserState(Enum):
    """
    Enumeration of document phases.

    START: Expecting the document header.
    HEADER: Expecting the *PART* marker.
    PART_SECTION: Reading part lines until *NET*.
    NET_SECTION: In the net section with no net open.
    IN_SIGNAL: A net is open and accepting pin lines.
    DONE: *END* seen; remaining lines are ignored.
    """

    START = auto()
    HEADER = auto()
    PART_SECTION = auto()
    NET_SECTION = auto()
    IN_SIGNAL = auto()
    DONE = auto()


class PadsParser:
    """
    Parses PADS-PCB / PADS2000 netlist text into a Netlist.

    The parser object only holds options; each call to ``parse`` builds a
    fresh accumulator, so one instance can be shared between callers.
    """

    def __init__(self, options: ParserOptions | None = None):
        """
        Initializes the parser.

        :param options: Parse options; defaults to strict mode.
        """
        self.options = options or ParserOptions()

    def parse(self, text: str) -> Netlist:
        """
        Parses a complete document.

        :param text: Document text, lines separated by line feeds.
        :return: Netlist; in partial mode its errors may be non-empty.
        :raises ParserError: In strict mode, the first error encountered.
        """
        builder = NetlistBuilder(options=self.options)
        lines = LineClassifier(text)
        state = ParserState.START

        for line in lines:
            try:
                state = self._step(state, line, builder)
            except ParserError as error:
                self._handle_error(error, builder)
                state = self._resync(state, builder)

        if state is not ParserState.DONE:
            builder.close_net()
            self._handle_error(ParserError(ErrorCode.UNEXPECTED_EOF, max(lines.current_line_number, 1)), builder)

        return builder.build()

    def _handle_error(self, error: ParserError, builder: NetlistBuilder) -> None:
        """Raises the error in strict mode, records it in partial mode."""
        if not self.options.partial:
            raise error
        builder.record_error(error)

    @staticmethod
    def _resync(state: ParserState, builder: NetlistBuilder) -> ParserState:
        """Derives the state to continue from after a failed line."""
        if state in (ParserState.NET_SECTION, ParserState.IN_SIGNAL):
            return ParserState.IN_SIGNAL if builder.current_net is not None else ParserState.NET_SECTION
        return state

    def _step(self, state: ParserState, line: SourceLine, builder: NetlistBuilder) -> ParserState:
        match state:
            case ParserState.START:
                netlist_format = NetlistFormat.from_header(line.text)
                if netlist_format is None:
                    raise ParserError(ErrorCode.INVALID_FILE_HEADER, line.number, line.text)
                builder.format = netlist_format
                return ParserState.HEADER
            case ParserState.HEADER:
                if not line.text.startswith(PART_MARKER):
                    raise ParserError(ErrorCode.MISSING_PART_SECTION, line.number, line.text)
                return ParserState.PART_SECTION
            case ParserState.PART_SECTION:
                return self._step_part_section(line, builder)
            case ParserState.NET_SECTION | ParserState.IN_SIGNAL:
                return self._step_net_section(state, line, builder)
            case ParserState.DONE:
                return state

    @staticmethod
    def _step_part_section(line: SourceLine, builder: NetlistBuilder) -> ParserState:
        text = line.text
        if text.startswith(NET_MARKER):
            return ParserState.NET_SECTION
        if text.startswith(SECTION_SIGIL):
            if text.startswith(END_MARKER):
                raise ParserError(ErrorCode.MISSING_NET_SECTION, line.number, text)
            if is_known_marker(text):
                raise ParserError(ErrorCode.UNEXPECTED_SECTION, line.number, text)
            raise ParserError(ErrorCode.INVALID_SECTION_HEADER, line.number, text)
        parse_part_line(line, builder)
        return ParserState.PART_SECTION

    @staticmethod
    def _step_net_section(state: ParserState, line: SourceLine, builder: NetlistBuilder) -> ParserState:
        text = line.text
        if text.startswith(SIGNAL_MARKER):
            builder.close_net()
            parse_net_header(line, builder)
            return ParserState.IN_SIGNAL
        if text.startswith(END_MARKER):
            builder.close_net()
            return ParserState.DONE
        if state is ParserState.IN_SIGNAL:
            parse_pin_line(line, builder)
            return ParserState.IN_SIGNAL
        # Lines before the first *SIGNAL* are ignored.
        return ParserState.NET_SECTION


def _resolve_options(mode: ParseMode | str | None, options: ParserOptions | None) -> ParserOptions:
    options = options or ParserOptions()
    if mode is not None:
        options = dataclasses.replace(options, mode=ParseMode(mode))
    return options


def parse(text: str, mode: ParseMode | str | None = None, options: ParserOptions | None = None) -> Netlist:
    """
    Parses a PADS netlist document.

    :param text: Complete document text.
    :param mode: ``ParseMode`` or its value ('strict' / 'partial'); overrides ``options.mode``.
    :param options: Parse options.
    :return: Parsed Netlist.
    :raises ParserError: In strict mode, the first error encountered.
    :raises ValueError: If mode is not a recognised mode.
    """
    return PadsParser(_resolve_options(mode, options)).parse(text)


async def parse_async(
    text: str, mode: ParseMode | str | None = None, options: ParserOptions | None = None
) -> Netlist:
    """Coroutine wrapper around ``parse``; the pass itself never yields."""
    return parse(text, mode=mode, options=options)
