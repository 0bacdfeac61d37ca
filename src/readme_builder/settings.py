from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv
from pydantic import BaseModel, ConfigDict, Field

from readme_builder.config import (
    API_KEY_ENV_VARS,
    DEFAULT_HARM_CATEGORIES,
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL_NAME,
    DEFAULT_SAFETY_THRESHOLD,
    DEFAULT_SEED_MODEL_MESSAGE,
    DEFAULT_SEED_USER_MESSAGE,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
    HarmBlockThreshold,
    HarmCategory,
    Strategy,
)

ENV_FILE = find_dotenv(usecwd=True)


class GenerationSettings(BaseModel):
    """Parameters of the model-assisted generator."""

    model_config = ConfigDict(frozen=True, extra="forbid", protected_namespaces=())

    model_name: str = Field(default=DEFAULT_MODEL_NAME, description="Generative model name.")
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, description="Sampling temperature.")
    top_k: int = Field(default=DEFAULT_TOP_K, ge=1, description="Top-k sampling.")
    top_p: float = Field(default=DEFAULT_TOP_P, ge=0.0, le=1.0, description="Top-p sampling.")
    max_output_tokens: int = Field(
        default=DEFAULT_MAX_OUTPUT_TOKENS,
        ge=1,
        description="Maximum length of the answer, in tokens.",
    )
    safety_threshold: HarmBlockThreshold = Field(
        default=DEFAULT_SAFETY_THRESHOLD,
        description="Threshold applied to every harm category.",
    )
    harm_categories: tuple[HarmCategory, ...] = Field(
        default=DEFAULT_HARM_CATEGORIES,
        description="Harm categories gated by the safety threshold.",
    )
    seed_user_message: str = Field(
        default=DEFAULT_SEED_USER_MESSAGE,
        description="User turn of the example exchange.",
    )
    seed_model_message: str = Field(
        default=DEFAULT_SEED_MODEL_MESSAGE,
        description="Model turn of the example exchange.",
    )

    def generation_config(self) -> dict[str, Any]:
        return {
            "temperature": self.temperature,
            "top_k": self.top_k,
            "top_p": self.top_p,
            "max_output_tokens": self.max_output_tokens,
        }

    def safety_settings(self) -> list[dict[str, str]]:
        return [
            {"category": str(category), "threshold": str(self.safety_threshold)}
            for category in self.harm_categories
        ]

    def seed_history(self) -> list[dict[str, Any]]:
        """Return the two-turn conversation the chat is started with."""
        return [
            {"role": "user", "parts": [self.seed_user_message]},
            {"role": "model", "parts": [self.seed_model_message]},
        ]


class Settings(BaseModel):
    """Configuration settings for the readme_builder command."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    root: Path | None = Field(default_factory=Path.cwd, description="Project root.")
    strategy: Strategy = Field(default=Strategy.TEMPLATE, description="Generation strategy.")
    config: Path | None = Field(default=None, description="YAML file with generation overrides.")
    api_key: str = Field(default="", description="Credential for the model-assisted strategy.")
    insert_into: Path | None = Field(default=None, description="File whose selection is replaced.")
    selection: tuple[int, int] | None = Field(
        default=None,
        description="Character range [start, end) replaced in insert_into.",
    )
    log_file: str = Field(default="", description="Log file path.")
    generation: GenerationSettings = Field(default_factory=GenerationSettings)


def load_generation_settings(path: Path) -> GenerationSettings:
    """Load generation overrides from a YAML mapping.

    Keys that are not present keep their default value.

    Args:
        path (Path): the YAML file to read

    Raises:
        TypeError: if the document is not a mapping.

    Returns:
        GenerationSettings: the resulting generation settings
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        msg = f"Generation settings in {path} must be a mapping, got {type(data).__name__}"
        raise TypeError(msg)
    return GenerationSettings.model_validate(data)


def api_key_from_env() -> str:
    """Return the first non-empty API key found in the environment, or an empty string."""
    for var in API_KEY_ENV_VARS:
        value = os.environ.get(var, "").strip()
        if value:
            return value
    return ""
