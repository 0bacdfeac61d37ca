"""readme_builder: write a README for the project in the current directory.

Overview
--------
The command lists the project's files (honoring `.gitignore` lines as regular
expressions), reads `package.json` when there is one, and produces a README:

1) **template** (`--strategy template`, default): a fixed Spanish template
   filled with the manifest data and the file list. Offline and deterministic.

2) **model** (`--strategy model`): one request to a Gemini chat model, seeded
   with an example exchange. Needs an API key (`--api-key`, or `GEMINI_API_KEY`
   / `GOOGLE_API_KEY` in the environment or a `.env` file).

The document is printed on stdout, or replaces a character range of a file
(`--insert-into`, `--selection`).

Usage
-----
    - Template README on stdout:
        uv run readme-builder --root path/to/project

    - Ask the model, with overrides for the generation parameters:
        uv run readme-builder --strategy model --config generation.yaml

    - Replace characters 10 to 42 of README.md:
        uv run readme-builder --insert-into README.md --selection 10 42
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from readme_builder import __version__
from readme_builder.command import generate_readme, replace_selection
from readme_builder.config import Strategy
from readme_builder.exceptions import EmptyProjectError, NoProjectOpenError
from readme_builder.generators import build_generator
from readme_builder.logging import logger, setup_logging
from readme_builder.settings import ENV_FILE, GenerationSettings, Settings, api_key_from_env, load_generation_settings

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse command line arguments into settings.

    Args:
        argv (Sequence[str] | None): the arguments, defaults to `sys.argv[1:]`

    Returns:
        Settings: the command settings
    """
    p = argparse.ArgumentParser(
        prog="readme-builder",
        description="Generate a README for a project (template or generative model).",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--root", type=str, default=".", help="Project root.")
    p.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in Strategy],
        default=Strategy.TEMPLATE.value,
        help="Generation strategy.",
    )
    p.add_argument(
        "--config",
        type=str,
        default="",
        help="YAML file with generation overrides (model strategy).",
    )
    p.add_argument(
        "--api-key",
        type=str,
        default="",
        help="API key for the model strategy (defaults to GEMINI_API_KEY / GOOGLE_API_KEY).",
    )
    p.add_argument(
        "--insert-into",
        type=str,
        default="",
        help="Replace the selection of this file instead of printing.",
    )
    p.add_argument(
        "--selection",
        type=int,
        nargs=2,
        metavar=("START", "END"),
        default=None,
        help="Character range replaced in --insert-into (whole file if omitted).",
    )
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    args = p.parse_args(argv)

    if args.selection is not None and not args.insert_into:
        p.error("--selection requires --insert-into")

    if ENV_FILE:
        load_dotenv(ENV_FILE)

    config = Path(args.config) if args.config else None
    generation = load_generation_settings(config) if config else GenerationSettings()
    return Settings(
        root=Path(args.root),
        strategy=Strategy(args.strategy),
        config=config,
        api_key=args.api_key or api_key_from_env(),
        insert_into=Path(args.insert_into) if args.insert_into else None,
        selection=tuple(args.selection) if args.selection is not None else None,
        log_file=args.log_file,
        generation=generation,
    )


def write_document(settings: Settings, document: str) -> None:
    """Print the document, or splice it into the target file's selection."""
    if settings.insert_into is None:
        sys.stdout.write(document + "\n")
        return
    target = settings.insert_into
    current = target.read_text(encoding="utf-8") if target.exists() else ""
    start, end = settings.selection if settings.selection is not None else (0, len(current))
    target.write_text(replace_selection(current, start, end, document), encoding="utf-8")
    logger.info("selection_replaced", file=str(target), start=start, end=end)


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    root = settings.root.resolve() if settings.root is not None else None
    generator = build_generator(settings)
    try:
        document = asyncio.run(generate_readme(root, generator))
    except (NoProjectOpenError, EmptyProjectError) as e:
        print(e.message, file=sys.stderr)
        return 1

    write_document(settings, document)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
