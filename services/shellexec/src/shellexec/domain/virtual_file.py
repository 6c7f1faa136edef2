from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class VirtualFile:
    """In-memory file handed to build-pipeline consumers.

    ``path`` is always absolute. ``base`` defaults to the directory holding
    ``path`` so that ``relative`` is just the file name.
    """

    path: Path
    contents: bytes
    cwd: Path = field(default_factory=Path.cwd)
    base: Path | None = None

    def __post_init__(self) -> None:
        if self.base is None:
            object.__setattr__(self, "base", self.path.parent)

    @property
    def relative(self) -> Path:
        base = self.base if self.base is not None else self.path.parent
        return self.path.relative_to(base)

    @property
    def dirname(self) -> Path:
        return self.path.parent

    @property
    def basename(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def extname(self) -> str:
        return self.path.suffix

    def is_buffer(self) -> bool:
        return isinstance(self.contents, bytes)
