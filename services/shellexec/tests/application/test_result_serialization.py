from shellexec.application.result_serialization import serialize_result
from shellexec.domain.diagnostics import Diagnostic, Severity
from shellexec.domain.result import Result


def test_serialize_result_has_schema_fields():
    result = Result(
        value="ok",
        diagnostics=[
            Diagnostic(code="COMMAND_STDERR", rule="command.stderr", severity=Severity.WARN, message="w")
        ],
        artifacts=[{"kind": "text", "value": "ok"}],
    )
    data = serialize_result(result, command="run", args=["echo ok"])
    assert data["result_schema_version"] == 1
    assert data["command"] == "run"
    assert data["args"] == ["echo ok"]
    assert data["exit_code"] == 0
    assert data["artifacts"] == [{"kind": "text", "value": "ok"}]
    diag = data["diagnostics"][0]
    assert diag["code"] == "COMMAND_STDERR"
    assert diag["severity"] == "warn"
    assert data["warnings"] == 1
    assert diag["id"] == result.diagnostics[0].id
    assert "timestamp" in data
