from __future__ import annotations

from typing import TYPE_CHECKING

from readme_builder.exceptions import EmptyProjectError, InvalidSelectionError, NoProjectOpenError
from readme_builder.file_manipulation import load_manifest, scan
from readme_builder.logging import logger

if TYPE_CHECKING:
    from pathlib import Path

    from readme_builder.generators import ReadmeGenerator


async def generate_readme(root: Path | None, generator: ReadmeGenerator) -> str:
    """Scan a project and generate its README with the given generator.

    Args:
        root (Path | None): the project root supplied by the host, None when no project is open
        generator (ReadmeGenerator): the configured generation strategy

    Raises:
        NoProjectOpenError: if `root` is None; nothing is read in that case.
        EmptyProjectError: if the scan found no files; the generator is not called.

    Returns:
        str: the complete README document
    """
    if root is None:
        raise NoProjectOpenError

    files = scan(root)
    if not files:
        raise EmptyProjectError(root=root)

    manifest = load_manifest(root)
    document = await generator.generate(files, manifest)
    logger.info("readme_generated", root=str(root), generator=type(generator).__name__, chars=len(document))
    return document


def replace_selection(document: str, start: int, end: int, text: str) -> str:
    """Replace the `[start, end)` character range of `document` with `text`.

    Args:
        document (str): the current content of the editing surface
        start (int): first character of the selection
        end (int): character right after the selection
        text (str): the replacement

    Raises:
        InvalidSelectionError: if the range is inverted or does not fit in `document`.

    Returns:
        str: the updated content
    """
    if not 0 <= start <= end <= len(document):
        raise InvalidSelectionError(start=start, end=end, length=len(document))
    return document[:start] + text + document[end:]
