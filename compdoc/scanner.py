"""Component directory listing."""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Sequence

_SOURCE_PATTERN = re.compile(r"\.(tsx?|jsx?)$")
_EXCLUDED_MARKERS = (".test.", ".spec.", ".d.ts")


def is_component_source(filename: str) -> bool:
    """Return True for component sources; tests, specs and declaration files are skipped."""
    if not _SOURCE_PATTERN.search(filename):
        return False
    return not any(marker in filename for marker in _EXCLUDED_MARKERS)


def filter_component_files(
    filenames: Sequence[str], exclude_patterns: Sequence[str] = ()
) -> List[str]:
    """Keep component sources, preserving the given order."""
    kept: List[str] = []
    for filename in filenames:
        if not is_component_source(filename):
            continue
        if any(fnmatchcase(filename, pattern) for pattern in exclude_patterns):
            continue
        kept.append(filename)
    return kept


class ComponentScanner:
    """Lists the documentable files of a components directory."""

    def __init__(self, exclude_patterns: Sequence[str] = ()) -> None:
        self.exclude_patterns = [pattern.rstrip("/") for pattern in exclude_patterns if pattern.strip()]

    def list_components(self, directory: Path) -> List[Path]:
        """Return component source files directly inside ``directory``, sorted by name."""
        root = Path(directory).expanduser()
        if not root.exists():
            raise FileNotFoundError(f"Components directory not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Components path is not a directory: {root}")

        names = sorted(entry.name for entry in root.iterdir() if entry.is_file())
        return [root / name for name in filter_component_files(names, self.exclude_patterns)]


__all__ = ["ComponentScanner", "filter_component_files", "is_component_source"]
