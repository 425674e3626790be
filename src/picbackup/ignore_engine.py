from __future__ import annotations

from pathlib import PurePath
from typing import Iterable

import pathspec


class IgnoreEngine:
    """Gitignore-style exclude patterns, matched relative to a source root."""

    def __init__(self, patterns: Iterable[str]) -> None:
        cleaned = [pattern for pattern in patterns if pattern.strip()]
        self._enabled = bool(cleaned)
        self._spec = pathspec.PathSpec.from_lines("gitignore", cleaned)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def is_ignored(self, relative_path: PurePath, is_dir: bool = False) -> bool:
        if not self._enabled:
            return False
        unix_path = relative_path.as_posix()
        candidate = f"{unix_path}/" if is_dir and not unix_path.endswith("/") else unix_path
        return self._spec.match_file(candidate)


def build_ignore_engine(patterns: Iterable[str] | None = None) -> IgnoreEngine:
    return IgnoreEngine(patterns or [])
