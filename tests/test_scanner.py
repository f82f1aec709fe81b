from padsio.ingestor.scanner import LineClassifier, SourceLine


def test_skips_blank_and_comment_lines():
    text = "*PADS-PCB*\n\n// comment\n   \n*PART*\n"
    assert list(LineClassifier(text)) == [SourceLine(1, "*PADS-PCB*"), SourceLine(5, "*PART*")]


def test_trims_whitespace_and_carriage_returns():
    lines = list(LineClassifier("  U1 DIP14 \r\n\tR1 0805\r\n"))
    assert [line.text for line in lines] == ["U1 DIP14", "R1 0805"]
    assert [line.number for line in lines] == [1, 2]


def test_indented_comment_is_skipped():
    assert list(LineClassifier("   // note\nX")) == [SourceLine(2, "X")]


def test_counts_every_physical_line():
    classifier = LineClassifier("a\n\nb\n")
    list(classifier)
    assert classifier.current_line_number == 4


def test_is_lazy():
    classifier = LineClassifier("a\nb\nc")
    iterator = iter(classifier)
    assert next(iterator) == SourceLine(1, "a")
    assert classifier.current_line_number == 1


def test_empty_text():
    classifier = LineClassifier("")
    assert list(classifier) == []
    assert classifier.current_line_number == 1
