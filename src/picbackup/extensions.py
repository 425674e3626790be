from __future__ import annotations

from pathlib import PurePath
from typing import Iterable


DEFAULT_EXTENSIONS = frozenset(
    {
        "png",
        "jpg",
        "jpeg",
        "bmp",
        "gif",
        "tiff",
        "avi",
        "mpg",
        "mpeg",
        "m1v",
        "mp2",
        "mpe",
        "m3u",
        "ivf",
        "mov",
        "mp4",
        "m4v",
        "mp4v",
        "3g2",
        "3gp2",
        "3gp",
        "3gpp",
        "m2ts",
    }
)


def file_extension(path: str | PurePath) -> str:
    """Return the text after the last '.' of the final path segment, or ''.

    Unlike ``PurePath.suffix`` a bare dotfile such as ``.jpg`` has the
    extension ``jpg``.
    """
    name = PurePath(path).name
    _, dot, extension = name.rpartition(".")
    return extension if dot else ""


def _normalize(extension: str) -> str:
    return extension.strip().lstrip(".")


class ExtensionClassifier:
    def __init__(
        self,
        extra_extensions: Iterable[str] = (),
        ignore_case: bool = False,
    ) -> None:
        extensions = set(DEFAULT_EXTENSIONS)
        extensions.update(_normalize(item) for item in extra_extensions if _normalize(item))
        self.ignore_case = ignore_case
        if ignore_case:
            extensions = {item.lower() for item in extensions}
        self._extensions = frozenset(extensions)

    @property
    def extensions(self) -> frozenset[str]:
        return self._extensions

    def is_eligible(self, path: str | PurePath) -> bool:
        extension = file_extension(path)
        if not extension:
            return False
        if self.ignore_case:
            extension = extension.lower()
        return extension in self._extensions


_DEFAULT_CLASSIFIER = ExtensionClassifier()


def want_to_backup(path: str | PurePath) -> bool:
    return _DEFAULT_CLASSIFIER.is_eligible(path)
