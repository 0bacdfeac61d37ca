from __future__ import annotations

import os
import re
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from readme_builder.config import IGNORE_FILE_NAME, MANIFEST_FILE_NAME, Manifest
from readme_builder.exceptions import InvalidIgnorePatternError, ManifestParseError
from readme_builder.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence


def relpath(path: Path, root: Path) -> str:
    """Send the relative path of path from root.

    Args:
        path (Path): the path to "relativise"
        root (Path): the root to relativise from

    Returns:
        str: the relative path from root to path, with POSIX separators.
            If path is not under root, returns the original path as a string.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def read_ignore_patterns(root: Path) -> list[str]:
    """Read the raw ignore patterns from `root/.gitignore`.

    Lines are stripped; empty lines and `#` comments are dropped. The remaining
    lines are returned verbatim: they are later used as regular expressions, not
    as glob patterns, so `*.log` is not the usual "every log file".

    Args:
        root (Path): the project root

    Returns:
        list[str]: the patterns, in file order; empty when there is no ignore file
    """
    ignore_file = root / IGNORE_FILE_NAME
    if not ignore_file.exists():
        return []
    content = ignore_file.read_text(encoding="utf-8")
    patterns: list[str] = []
    for line in content.split("\n"):
        line = line.strip()  # noqa: PLW2901
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


def compile_ignore_patterns(patterns: Sequence[str]) -> list[re.Pattern[str]]:
    """Compile raw ignore patterns into regular expressions.

    Args:
        patterns (Sequence[str]): the raw patterns

    Raises:
        InvalidIgnorePatternError: if a pattern is not a valid regular expression.

    Returns:
        list[re.Pattern[str]]: the compiled patterns, in the same order
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise InvalidIgnorePatternError(pattern=pattern, message=str(e)) from e
    return compiled


def is_ignored(rel: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    """Check if a relative path is matched anywhere by at least one pattern.

    Args:
        rel (str): the relative path to check
        patterns (Sequence[re.Pattern[str]]): the compiled ignore patterns

    Returns:
        bool: True if any pattern is found in `rel`, False otherwise
    """
    return any(p.search(rel) for p in patterns)


def walk_files(root: Path) -> list[Path]:
    """Walk the directory tree rooted at `root` depth-first and return every file.

    Entries of a directory are visited in name order and every directory is
    descended into. Symlinks are followed; there is no cycle protection.

    Args:
        root (Path): the root directory to walk

    Raises:
        OSError: if `root` or one of its entries cannot be listed or stat'ed.

    Returns:
        list[Path]: all non-directory entries found under `root`
    """
    results: list[Path] = []

    def visit(directory: Path) -> None:
        for name in sorted(os.listdir(directory)):
            p = directory / name
            if stat.S_ISDIR(p.stat().st_mode):
                visit(p)
            else:
                results.append(p)

    visit(root)
    return results


def scan(root: Path) -> list[str]:
    """List the files of a project, relative to its root, minus the ignored ones.

    Only files are tested against the ignore patterns; a pattern meant to drop
    a whole directory has to match the relative path of each file inside it.

    Args:
        root (Path): the project root

    Returns:
        list[str]: relative POSIX paths, in walk order
    """
    patterns = compile_ignore_patterns(read_ignore_patterns(root))
    files: list[str] = []
    ignored = 0
    for f in walk_files(root):
        rel = relpath(f, root)
        if is_ignored(rel, patterns):
            ignored += 1
            continue
        files.append(rel)
    logger.info("scan_complete", root=str(root), files=len(files), ignored=ignored, patterns=len(patterns))
    return files


def load_manifest(root: Path) -> Manifest | None:
    """Load the project manifest found at `root/package.json`.

    Args:
        root (Path): the project root

    Raises:
        ManifestParseError: if the manifest is not valid JSON or does not have the expected shape.

    Returns:
        Manifest | None: the parsed manifest, or None when there is no manifest
    """
    manifest_file = root / MANIFEST_FILE_NAME
    if not manifest_file.exists():
        return None
    content = manifest_file.read_text(encoding="utf-8")
    try:
        manifest = Manifest.model_validate_json(content)
    except ValidationError as e:
        raise ManifestParseError(file=manifest_file, message=str(e)) from e
    logger.info("manifest_loaded", file=str(manifest_file), name=manifest.name)
    return manifest
