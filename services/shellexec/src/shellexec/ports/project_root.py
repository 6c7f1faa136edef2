from pathlib import Path
from typing import Protocol


class ProjectRootPort(Protocol):
    def resolve(self) -> Path: ...
