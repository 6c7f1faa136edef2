from shellexec.adapters.project_root.markers import (
    PROJECT_ROOT_ENV,
    FixedProjectRoot,
    MarkerProjectRoot,
)


def test_nearest_marker_wins(tmp_path, monkeypatch):
    monkeypatch.delenv(PROJECT_ROOT_ENV, raising=False)
    (tmp_path / "pyproject.toml").write_text("")
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)
    assert MarkerProjectRoot(nested).resolve() == tmp_path.resolve()


def test_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path))
    assert MarkerProjectRoot(tmp_path / "elsewhere").resolve() == tmp_path.resolve()


def test_env_override_ignored_when_not_a_directory(tmp_path, monkeypatch):
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path / "nope"))
    (tmp_path / "setup.cfg").write_text("")
    assert MarkerProjectRoot(tmp_path).resolve() == tmp_path.resolve()


def test_fixed_root_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert FixedProjectRoot(tmp_path).resolve().is_absolute()
