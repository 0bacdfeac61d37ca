"""README generation strategies.

Two interchangeable implementations sit behind `ReadmeGenerator`:

- `TemplateReadmeGenerator` fills a fixed template, synchronously and offline;
- `ModelReadmeGenerator` asks a Gemini chat model for the document, in a single
  request seeded with one example exchange.

The implementation is chosen once, from the settings, by `build_generator`.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from readme_builder.config import Strategy
from readme_builder.exceptions import MissingCredentialError, ModelRequestError, ModelResponseError
from readme_builder.logging import logger
from readme_builder.output_construction import build_prompt, build_readme
from readme_builder.settings import GenerationSettings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from readme_builder.config import Manifest
    from readme_builder.settings import Settings


class ReadmeGenerator(abc.ABC):
    """Produce a README document from a file list and an optional manifest."""

    @abc.abstractmethod
    async def generate(self, files: Sequence[str], manifest: Manifest | None) -> str: ...


class TemplateReadmeGenerator(ReadmeGenerator):
    async def generate(self, files: Sequence[str], manifest: Manifest | None) -> str:
        return build_readme(files, manifest)


class ModelReadmeGenerator(ReadmeGenerator):
    """Generate the README with one round-trip to a Gemini chat model.

    The answer is returned verbatim; its structure is not checked. Errors are
    raised as they happen, without retry or fallback to the template.

    The API key is installed with `genai.configure`, which is process-wide: the
    last generator to run sets the key for every other `genai` user.
    """

    def __init__(self, api_key: str, generation: GenerationSettings | None = None) -> None:
        self.api_key = api_key
        self.generation = generation or GenerationSettings()

    def _make_model(self) -> genai.GenerativeModel:
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(
            self.generation.model_name,
            generation_config=self.generation.generation_config(),
            safety_settings=self.generation.safety_settings(),
        )

    async def generate(self, files: Sequence[str], manifest: Manifest | None) -> str:
        if not self.api_key:
            raise MissingCredentialError

        model_name = self.generation.model_name
        chat = self._make_model().start_chat(history=self.generation.seed_history())
        prompt = build_prompt(files, manifest)
        logger.info("model_request_sent", model=model_name, files=len(files), prompt_chars=len(prompt))
        try:
            response = await chat.send_message_async(prompt)
        except google_exceptions.GoogleAPIError as e:
            logger.error("model_request_failed", model=model_name, error=str(e))
            raise ModelRequestError(model_name=model_name, message=str(e)) from e
        except (genai.types.BlockedPromptException, genai.types.StopCandidateException) as e:
            # The chat session rejects blocked prompts and candidates stopped for SAFETY, RECITATION, ...
            logger.error("model_response_blocked", model=model_name, error=str(e))
            raise ModelResponseError(model_name=model_name, message=str(e)) from e

        try:
            text = response.text
        except ValueError as e:
            logger.error("model_response_unusable", model=model_name, error=str(e))
            raise ModelResponseError(model_name=model_name, message=str(e)) from e
        logger.info("model_response_received", model=model_name, chars=len(text))
        return text


def build_generator(settings: Settings) -> ReadmeGenerator:
    """Build the generator selected by the settings.

    Args:
        settings (Settings): the command settings

    Returns:
        ReadmeGenerator: the generator for `settings.strategy`
    """
    if settings.strategy == Strategy.MODEL:
        return ModelReadmeGenerator(api_key=settings.api_key, generation=settings.generation)
    return TemplateReadmeGenerator()
