import pytest

from shellexec.domain.errors import UnsupportedOutputKind
from shellexec.domain.output_kind import OutputKind, parse_output_kind, valid_output_kinds


def test_parse_accepts_enum_and_values():
    assert parse_output_kind(OutputKind.STREAM) is OutputKind.STREAM
    assert parse_output_kind("binary") is OutputKind.BINARY
    assert parse_output_kind("virtual_file") is OutputKind.VIRTUAL_FILE


@pytest.mark.parametrize("value", ["TEXT", " vinyl ", "Binary", ""])
def test_parse_matches_exactly(value):
    with pytest.raises(UnsupportedOutputKind):
        parse_output_kind(value)


@pytest.mark.parametrize(
    "alias,kind",
    [("string", OutputKind.TEXT), ("buffer", OutputKind.BINARY), ("vinyl", OutputKind.VIRTUAL_FILE)],
)
def test_parse_accepts_legacy_names(alias, kind):
    assert parse_output_kind(alias) is kind


def test_parse_rejects_unknown_kind_and_lists_valid_set():
    with pytest.raises(UnsupportedOutputKind) as exc:
        parse_output_kind("xml")
    assert exc.value.value == "xml"
    assert exc.value.valid_kinds == ["text", "binary", "stream", "virtual_file"]
    assert '"xml"' in str(exc.value)
    assert "text, binary, stream, virtual_file" in str(exc.value)


def test_parse_rejects_non_string():
    with pytest.raises(UnsupportedOutputKind):
        parse_output_kind(42)  # type: ignore[arg-type]


def test_valid_kinds_order():
    assert valid_output_kinds() == ["text", "binary", "stream", "virtual_file"]
