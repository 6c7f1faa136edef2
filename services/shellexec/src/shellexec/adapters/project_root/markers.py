from pathlib import Path
import os

PROJECT_ROOT_ENV = "SHELLEXEC_PROJECT_ROOT"
PROJECT_MARKERS = ("pyproject.toml", "setup.cfg", "setup.py", ".git")


class MarkerProjectRoot:
    """Finds the enclosing project by walking up to the nearest marker file."""

    def __init__(self, start: Path | None = None) -> None:
        self.start = start

    def resolve(self) -> Path:
        override = os.environ.get(PROJECT_ROOT_ENV)
        if override:
            candidate = Path(override).expanduser().resolve()
            if candidate.is_dir():
                return candidate
        start = (self.start or Path.cwd()).resolve()
        for parent in (start, *start.parents):
            if any((parent / marker).exists() for marker in PROJECT_MARKERS):
                return parent
        return start


class FixedProjectRoot:
    def __init__(self, root: Path) -> None:
        self.root = root

    def resolve(self) -> Path:
        return self.root.resolve()
