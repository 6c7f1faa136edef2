from pathlib import Path

from shellexec.application.settings import effective_options, read_settings
from shellexec.domain.options import DEFAULT_MAX_OUTPUT_BYTES, ExecutionOptions


def test_missing_pyproject_gives_empty_settings(tmp_path):
    result = read_settings(tmp_path)
    assert result.value == {}
    assert result.diagnostics == []


def test_reads_tool_table(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.shellexec]\nencoding = 'latin-1'\ntimeout_ms = 500\n"
    )
    result = read_settings(tmp_path)
    assert result.value == {"encoding": "latin-1", "timeout_ms": 500}


def test_parse_failure_is_a_warning(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.shellexec\n")
    result = read_settings(tmp_path)
    assert result.value == {}
    assert [d.code for d in result.diagnostics] == ["SETTINGS_PARSE_FAILED"]
    assert result.exit_code == 0


def test_effective_options_precedence(tmp_path):
    settings = {"encoding": "latin-1", "timeout_ms": 500}
    options = effective_options(settings, cwd=tmp_path, timeout_ms=50, encoding=None)
    assert options == ExecutionOptions(
        cwd=tmp_path,
        encoding="latin-1",
        timeout_ms=50,
        max_output_bytes=DEFAULT_MAX_OUTPUT_BYTES,
    )


def test_effective_options_defaults():
    assert effective_options(None) == ExecutionOptions()
    assert effective_options({}, cwd=Path("x")).cwd == Path("x")
