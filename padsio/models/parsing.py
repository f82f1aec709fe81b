"""
Defines parsing infrastructure for PADS netlist ingestion.

Provides the error taxonomy, error and warning records, and the option
containers that configure how raw text is converted to structured data.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ErrorCode",
    "ParserError",
    "ParseWarning",
    "ParseMode",
    "LengthPolicy",
    "ParserOptions",
]


class ErrorCode(Enum):
    """
    Enumeration of parser error codes.

    Each member carries a stable short code and a fixed message template.
    Codes are grouped by category:

    E0xx: File and document-level errors.
    E1xx: Section errors.
    E2xx: Part errors.
    E3xx: Net errors.
    E4xx: Pin errors.
    E5xx: Catch-all errors.
    """

    FILE_NOT_FOUND = ("E001", "File not found.")
    FILE_READ_ERROR = ("E002", "Error reading file.")
    INVALID_FILE_HEADER = ("E003", "Invalid file header. Expected '*PADS-PCB*' or '*PADS2000*'.")
    UNEXPECTED_EOF = ("E004", "Unexpected end of file.")

    MISSING_PART_SECTION = ("E101", "Missing '*PART*' section.")
    MISSING_NET_SECTION = ("E102", "Missing '*NET*' section.")
    INVALID_SECTION_HEADER = ("E103", "Invalid section header. Expected '*PART*' or '*NET*'.")
    UNEXPECTED_SECTION = ("E104", "Unexpected section found.")

    INVALID_PART_FORMAT = ("E201", "Invalid part format. Expected 'RefDes Footprint [Value]'.")
    DUPLICATE_PART = ("E202", "Duplicate part reference designator found.")
    PART_REFDES_TOO_LONG = ("E203", "Part reference designator exceeds maximum length.")
    INVALID_PART_REFDES = ("E204", "Part reference designator contains invalid characters.")
    FOOTPRINT_NAME_TOO_LONG = ("E205", "Footprint name exceeds maximum length.")

    INVALID_NET_FORMAT = ("E301", "Invalid net format. Expected '*SIGNAL* NetName'.")
    EMPTY_NET_NAME = ("E302", "Net name cannot be empty")
    DUPLICATE_NET_NAME = ("E303", "Duplicate net name found.")
    NET_NAME_TOO_LONG = ("E304", "Net name exceeds maximum length.")
    INVALID_NET_NAME = ("E305", "Net name contains invalid characters.")

    INVALID_PIN_FORMAT = ("E401", "Invalid pin format. Expected 'RefDes.Pin'.")
    DUPLICATE_PIN = ("E402", "Duplicate pin connection found in net.")
    PIN_REFDES_TOO_LONG = ("E403", "Pin reference designator exceeds maximum length.")
    PIN_NAME_TOO_LONG = ("E404", "Pin name exceeds maximum length.")

    UNEXPECTED_TOKEN = ("E501", "Unexpected token found.")
    MISSING_TOKEN = ("E502", "Expected token is missing.")

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message


class ParserError(Exception):
    """
    A single parsing failure with source context.

    Raised in strict mode and collected in partial mode. Instances are
    immutable values: they compare, hash and pickle by their fields.

    :param error_code: Taxonomy member describing the failure.
    :param line: 1-indexed source line the problem was detected on.
    :param detail: Optional offending token, kept apart from the fixed message.
    """

    def __init__(self, error_code: ErrorCode, line: int, detail: str | None = None):
        if line < 1:
            raise ValueError(f"line must be >= 1, got {line}")
        super().__init__(f"{error_code.message} (line {line})")
        self._error_code = error_code
        self._line = line
        self._detail = detail

    @property
    def error_code(self) -> ErrorCode:
        return self._error_code

    @property
    def code(self) -> str:
        return self._error_code.code

    @property
    def message(self) -> str:
        return self._error_code.message

    @property
    def line(self) -> int:
        return self._line

    @property
    def detail(self) -> str | None:
        return self._detail

    def _key(self) -> tuple:
        return (self.code, self.message, self.line, self.detail)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParserError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __reduce__(self):
        return (self.__class__, (self._error_code, self._line, self._detail))

    def __repr__(self) -> str:
        return f"ParserError(code={self.code!r}, line={self.line}, detail={self.detail!r})"


@dataclass(slots=True, frozen=True)
class ParseWarning:
    """
    Records a non-fatal input-quality event.

    :param line: 1-indexed line number where the event occurred.
    :param message: Human-readable description.
    """

    line: int
    message: str


class ParseMode(Enum):
    """
    Error handling mode of a parse call.

    STRICT: The first error aborts the parse and is raised.
    PARTIAL: Errors are recorded and parsing continues best-effort.
    """

    STRICT = "strict"
    PARTIAL = "partial"


class LengthPolicy(Enum):
    """
    Treatment of identifiers that exceed their maximum length.

    TRUNCATE: Shorten the identifier and record a warning.
    REJECT: Fail the line with the matching *_TOO_LONG error.
    """

    TRUNCATE = "truncate"
    REJECT = "reject"


@dataclass(slots=True, frozen=True)
class ParserOptions:
    """
    Configuration for a parse call.

    :param mode: Strict or partial error handling.
    :param length_policy: Truncate-or-reject policy for over-length identifiers.
    :param case_sensitive: Whether duplicate detection compares names case-sensitively.
    :param max_refdes_length: Maximum reference designator length (parts and pins).
    :param max_footprint_length: Maximum footprint name length.
    :param max_net_name_length: Maximum net name length.
    :param max_pin_name_length: Maximum pin name length.
    """

    mode: ParseMode = ParseMode.STRICT
    length_policy: LengthPolicy = LengthPolicy.TRUNCATE
    case_sensitive: bool = True
    max_refdes_length: int = 8
    max_footprint_length: int = 40
    max_net_name_length: int = 47
    max_pin_name_length: int = 8

    @property
    def partial(self) -> bool:
        return self.mode is ParseMode.PARTIAL

    def name_key(self, name: str) -> str:
        """Returns the comparison key used for duplicate detection."""
        return name if self.case_sensitive else name.casefold()
