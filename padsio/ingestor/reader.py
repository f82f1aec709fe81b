"""
Reads PADS netlist files from disk.

Thin collaborator around the parser: loads the file as text and hands it
over whole. File-system failures surface as ParserError so callers deal
with a single error type.
"""

import logging
from pathlib import Path

from padsio.ingestor.parser import parse
from padsio.models.pads import Netlist
from padsio.models.parsing import ErrorCode, ParseMode, ParserError, ParserOptions

__all__ = ["read_netlist"]

logger = logging.getLogger(__name__)


def read_netlist(
    filepath: str | Path,
    mode: ParseMode | str | None = None,
    options: ParserOptions | None = None,
    encoding: str = "utf-8",
) -> Netlist:
    """
    Reads and parses a netlist file.

    :param filepath: Path to the .net / .asc file.
    :param mode: Strict or partial mode; overrides ``options.mode``.
    :param options: Parse options.
    :param encoding: Text encoding of the file.
    :return: Parsed Netlist.
    :raises ParserError: FILE_NOT_FOUND / FILE_READ_ERROR on I/O failure, or
        the first parse error in strict mode.
    """
    path = Path(filepath)
    logger.debug("Reading netlist %s", path)
    try:
        text = path.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise ParserError(ErrorCode.FILE_NOT_FOUND, 1, str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ParserError(ErrorCode.FILE_READ_ERROR, 1, f"{path}: {e}") from e
    return parse(text, mode=mode, options=options)
