from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ReadmeBuilderError(Exception):
    """Base exception for errors in the readme_builder module."""


@dataclass(frozen=True)
class NoProjectOpenError(ReadmeBuilderError):
    """Raised when no project root was supplied by the host."""

    message: str = "No se ha encontrado un proyecto abierto."


@dataclass(frozen=True)
class EmptyProjectError(ReadmeBuilderError):
    """Raised when the scanner found no files under the project root."""

    root: Path
    message: str = "El proyecto no contiene archivos."


@dataclass(frozen=True)
class InvalidIgnorePatternError(ReadmeBuilderError):
    """Raised when a `.gitignore` line is not a valid regular expression."""

    pattern: str
    message: str


@dataclass(frozen=True)
class ManifestParseError(ReadmeBuilderError):
    """Raised when the manifest exists but cannot be parsed."""

    file: Path
    message: str


@dataclass(frozen=True)
class MissingCredentialError(ReadmeBuilderError):
    """Raised when the model-assisted strategy has no API key."""

    message: str = "No API key configured for the model-assisted generator."


@dataclass(frozen=True)
class ModelRequestError(ReadmeBuilderError):
    """Raised when the request to the generative model does not complete."""

    model_name: str
    message: str


@dataclass(frozen=True)
class ModelResponseError(ReadmeBuilderError):
    """Raised when the generative model answers without usable text."""

    model_name: str
    message: str


@dataclass(frozen=True)
class InvalidSelectionError(ReadmeBuilderError):
    """Raised when a selection range does not fit inside the target document."""

    start: int
    end: int
    length: int
    message: str = "Selection range is outside the document."
