from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

from readme_builder.config import (
    BOILERPLATE_SECTIONS,
    DEPENDENCIES_HEADING,
    DEV_DEPENDENCIES_HEADING,
    FILE_LIST_HEADING,
    README_TITLE,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from readme_builder.config import Manifest


def _write_dependencies(out: io.StringIO, heading: str, deps: Mapping[str, str]) -> None:
    out.write(f"\n{heading}\n")
    for name, version in deps.items():
        out.write(f"- {name}: {version}\n")


def build_readme(files: Sequence[str], manifest: Manifest | None = None) -> str:
    """Fill the README template with the project's files and manifest data.

    The layout is:
    1) a title line,
    2) when a manifest is given, the project name, the optional description and
       one section per dependency map present in the manifest,
    3) the list of project files, in the given order,
    4) fixed placeholder sections (getting started, installation, usage,
       contributing, license).

    The result is a pure function of its arguments and has no trailing newline.

    Args:
        files (Sequence[str]): relative file paths, as returned by the scanner
        manifest (Manifest | None): the project manifest, if any

    Returns:
        str: the README document
    """
    out = io.StringIO()
    out.write(f"{README_TITLE}\n\n")

    if manifest is not None:
        out.write(f"Nombre del Proyecto: {manifest.name or ''}\n")
        if manifest.description:
            out.write(f"Descripción: {manifest.description}\n")
        if manifest.dependencies is not None:
            _write_dependencies(out, DEPENDENCIES_HEADING, manifest.dependencies)
        if manifest.dev_dependencies is not None:
            _write_dependencies(out, DEV_DEPENDENCIES_HEADING, manifest.dev_dependencies)
        out.write("\n")

    out.write(f"{FILE_LIST_HEADING}\n")
    out.write("\n".join(f"- {f}" for f in files))
    out.write("\n")

    for title, body in BOILERPLATE_SECTIONS:
        out.write(f"\n## {title}\n\n{body}\n")

    return out.getvalue().rstrip("\n")


def build_prompt(files: Sequence[str], manifest: Manifest | None = None) -> str:
    """Render the files and manifest as the user turn sent to the generative model.

    The format follows the example exchange the chat is seeded with: a request
    line, the file list and, when available, the manifest as JSON.

    Args:
        files (Sequence[str]): relative file paths, as returned by the scanner
        manifest (Manifest | None): the project manifest, if any

    Returns:
        str: the prompt text
    """
    out = io.StringIO()
    out.write("Genera un archivo README.md en español para el siguiente proyecto.\n\n")
    out.write("Archivos del proyecto:\n")
    out.write("\n".join(f"- {f}" for f in files))
    if manifest is not None:
        data = manifest.model_dump(by_alias=True, exclude_none=True)
        out.write("\n\npackage.json:\n")
        out.write(json.dumps(data, indent=2, ensure_ascii=False))
    return out.getvalue()
