from pathlib import Path
import tomllib


def _pytest_options() -> dict:
    pyproject_path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    return data.get("tool", {}).get("pytest", {}).get("ini_options", {})


def test_pytest_asyncio_loop_scope_is_configured() -> None:
    assert _pytest_options().get("asyncio_default_fixture_loop_scope") == "function"


def test_test_roots_and_import_paths_are_configured() -> None:
    options = _pytest_options()
    assert "--import-mode=importlib" in options.get("addopts", "")
    assert "services/shellexec/tests" in options.get("testpaths", [])
    assert "scripts" in options.get("pythonpath", [])
