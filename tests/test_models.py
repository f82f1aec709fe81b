import pickle

import pytest

from padsio.models.format import NetlistFormat
from padsio.models.pads import Net, Netlist, Part, Pin
from padsio.models.parsing import ErrorCode, ParserError, ParserOptions


def test_error_code_fields():
    assert ErrorCode.DUPLICATE_NET_NAME.code == "E303"
    assert ErrorCode.INVALID_FILE_HEADER.message == "Invalid file header. Expected '*PADS-PCB*' or '*PADS2000*'."


def test_error_codes_are_unique():
    codes = [member.code for member in ErrorCode]
    assert len(codes) == len(set(codes))


def test_parser_error_fields_and_str():
    error = ParserError(ErrorCode.DUPLICATE_PART, 4, "U1")
    assert error.code == "E202"
    assert error.message == "Duplicate part reference designator found."
    assert error.line == 4
    assert error.detail == "U1"
    assert str(error) == "Duplicate part reference designator found. (line 4)"


def test_parser_error_is_immutable():
    error = ParserError(ErrorCode.DUPLICATE_PART, 4)
    with pytest.raises(AttributeError):
        error.line = 5


def test_parser_error_value_semantics():
    first = ParserError(ErrorCode.EMPTY_NET_NAME, 3)
    assert first == ParserError(ErrorCode.EMPTY_NET_NAME, 3)
    assert first != ParserError(ErrorCode.EMPTY_NET_NAME, 4)
    assert len({first, ParserError(ErrorCode.EMPTY_NET_NAME, 3)}) == 1
    assert pickle.loads(pickle.dumps(first)) == first


def test_parser_error_rejects_line_zero():
    with pytest.raises(ValueError):
        ParserError(ErrorCode.UNEXPECTED_EOF, 0)


def test_name_key_respects_case_policy():
    assert ParserOptions().name_key("Vcc") == "Vcc"
    assert ParserOptions(case_sensitive=False).name_key("Vcc") == "vcc"


def test_netlist_format_from_header():
    assert NetlistFormat.from_header("*PADS-PCB*") is NetlistFormat.PADS_PCB
    assert NetlistFormat.from_header("*PADS2000* extra") is NetlistFormat.PADS2000
    assert NetlistFormat.from_header("*pads-pcb*") is None


def test_netlist_lookups():
    netlist = Netlist(
        parts=[Part("U1", "DIP14"), Part("R1", "0805", "10k")],
        nets=[Net("VCC", [Pin("U1", "14"), Pin("X9", "1")])],
    )
    assert netlist.ok
    assert netlist.get_part("R1").value == "10k"
    assert netlist.get_part("R2") is None
    assert netlist.get_net("VCC").pins[0] == Pin("U1", "14")
    assert netlist.dangling_pins() == [("VCC", Pin("X9", "1"))]
    assert str(Pin("U1", "14")) == "U1.14"


def test_part_and_net_error_messages():
    assert ErrorCode.INVALID_PART_FORMAT.message == "Invalid part format. Expected 'RefDes Footprint [Value]'."
    assert ErrorCode.EMPTY_NET_NAME.message == "Net name cannot be empty"
    assert str(ParserError(ErrorCode.EMPTY_NET_NAME, 2)) == "Net name cannot be empty (line 2)"


def test_netlist_lookups_follow_case_policy():
    parts = [Part("U1", "DIP14")]
    nets = [Net("Vcc", [Pin("u1", "14")])]

    exact = Netlist(parts=parts, nets=nets)
    assert exact.get_part("u1") is None
    assert exact.get_net("VCC") is None
    assert exact.dangling_pins() == [("Vcc", Pin("u1", "14"))]

    folded = Netlist(parts=parts, nets=nets, case_sensitive=False)
    assert folded.get_part("u1") == Part("U1", "DIP14")
    assert folded.get_net("VCC").name == "Vcc"
    assert folded.dangling_pins() == []
