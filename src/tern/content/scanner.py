"""Content root discovery.

Walks the content directory tree once and yields every regular file,
content included. Hidden entries (names starting with ``.``) are
skipped at every level, the same way a default shell glob skips them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from tern.errors import ContentError

VERSION_FILE = "version"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A discovered file, read once."""

    path: Path
    relative_path: str  # POSIX separators, no leading slash
    content: bytes = field(repr=False)

    @property
    def name(self) -> str:
        return self.path.name


def scan_files(root: str | Path) -> Iterator[FileEntry]:
    """Yield every regular file under *root*, in sorted path order.

    Raises:
        ContentError: If *root* is not a directory or a file can't be read.
    """
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        msg = f"Content root not found: {root_path}"
        raise ContentError(msg)
    yield from _walk(root_path, root_path)


def _walk(directory: Path, root: Path) -> Iterator[FileEntry]:
    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        msg = f"Cannot list {directory}: {exc}"
        raise ContentError(msg) from exc

    for child in children:
        if child.name.startswith("."):
            continue
        if child.is_dir():
            yield from _walk(child, root)
        elif child.is_file():
            try:
                content = child.read_bytes()
            except OSError as exc:
                msg = f"Cannot read {child}: {exc}"
                raise ContentError(msg) from exc
            yield FileEntry(
                path=child,
                relative_path=child.relative_to(root).as_posix(),
                content=content,
            )


def read_version(root: str | Path) -> str:
    """Read the version tag from ``<root>/version``.

    Surrounding whitespace (the trailing newline most editors add) is
    stripped. The tag is used verbatim as the ETag and as a URL path
    segment, so an empty file is rejected.
    """
    version_path = Path(root).resolve() / VERSION_FILE
    try:
        version = version_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read version file {version_path}: {exc}"
        raise ContentError(msg) from exc
    if not version:
        msg = f"Version file {version_path} is empty"
        raise ContentError(msg)
    if "/" in version or any(ch.isspace() for ch in version):
        msg = f"Version tag {version!r} must be a single path segment"
        raise ContentError(msg)
    return version
