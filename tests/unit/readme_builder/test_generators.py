from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
from google.api_core import exceptions as google_exceptions
from google.generativeai import protos
from google.generativeai.types import generation_types

from readme_builder import generators
from readme_builder.config import Manifest, Strategy
from readme_builder.exceptions import MissingCredentialError, ModelRequestError, ModelResponseError
from readme_builder.output_construction import build_readme
from readme_builder.settings import GenerationSettings, Settings

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.fixture
def fake_genai(mocker: MockerFixture) -> Any:  # noqa: ANN401
    """Patch the Gemini client so that the chat answers with a fixed README."""
    mocker.patch.object(generators.genai, "configure")
    model_cls = mocker.patch.object(generators.genai, "GenerativeModel")
    chat = model_cls.return_value.start_chat.return_value
    chat.send_message_async = mocker.AsyncMock(return_value=mocker.Mock(text="# Generated README"))
    return model_cls


@pytest.mark.unit
def test_template_generator_matches_build_readme() -> None:
    manifest = Manifest(name="x")

    output = asyncio.run(generators.TemplateReadmeGenerator().generate(["a.txt"], manifest))

    assert output == build_readme(["a.txt"], manifest)


@pytest.mark.unit
def test_model_generator_without_key_fails_before_any_call(fake_genai: Any) -> None:  # noqa: ANN401
    generator = generators.ModelReadmeGenerator(api_key="")

    with pytest.raises(MissingCredentialError):
        asyncio.run(generator.generate(["a.txt"], None))

    fake_genai.assert_not_called()
    generators.genai.configure.assert_not_called()


@pytest.mark.unit
def test_model_generator_sends_one_seeded_request(fake_genai: Any) -> None:  # noqa: ANN401
    generation = GenerationSettings()
    generator = generators.ModelReadmeGenerator(api_key="secret", generation=generation)
    manifest = Manifest.model_validate({"name": "x", "dependencies": {"lib": "1.0.0"}})

    output = asyncio.run(generator.generate(["a.txt"], manifest))

    assert output == "# Generated README"
    generators.genai.configure.assert_called_once_with(api_key="secret")
    _, kwargs = fake_genai.call_args
    assert fake_genai.call_args.args == ("gemini-1.5-flash",)
    assert kwargs["generation_config"] == {
        "temperature": 0.9,
        "top_k": 1,
        "top_p": 1.0,
        "max_output_tokens": 2048,
    }
    assert kwargs["safety_settings"] == [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_ONLY_HIGH"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_ONLY_HIGH"},
        {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_ONLY_HIGH"},
        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_ONLY_HIGH"},
    ]
    model = fake_genai.return_value
    model.start_chat.assert_called_once_with(history=generation.seed_history())
    chat = model.start_chat.return_value
    chat.send_message_async.assert_awaited_once()
    prompt = chat.send_message_async.await_args.args[0]
    assert "- a.txt" in prompt
    assert '"lib": "1.0.0"' in prompt


@pytest.mark.unit
def test_model_generator_wraps_service_errors(fake_genai: Any, mocker: MockerFixture) -> None:  # noqa: ANN401
    chat = fake_genai.return_value.start_chat.return_value
    chat.send_message_async = mocker.AsyncMock(side_effect=google_exceptions.ServiceUnavailable("down"))
    generator = generators.ModelReadmeGenerator(api_key="secret")

    with pytest.raises(ModelRequestError) as exc_info:
        asyncio.run(generator.generate(["a.txt"], None))

    assert exc_info.value.model_name == "gemini-1.5-flash"
    assert isinstance(exc_info.value.__cause__, google_exceptions.ServiceUnavailable)
    assert chat.send_message_async.await_count == 1


@pytest.fixture
def real_chat_answering(mocker: MockerFixture) -> Any:  # noqa: ANN401
    """Keep the real chat session, but make the model return a canned low-level response."""
    mocker.patch.object(generators.genai, "configure")

    def answer(response: protos.GenerateContentResponse) -> Any:  # noqa: ANN401
        return mocker.patch.object(
            generators.genai.GenerativeModel,
            "generate_content_async",
            mocker.AsyncMock(return_value=generation_types.AsyncGenerateContentResponse.from_response(response)),
        )

    return answer


@pytest.mark.unit
def test_model_generator_safety_stopped_candidate_raises(real_chat_answering: Any) -> None:  # noqa: ANN401
    real_chat_answering(
        protos.GenerateContentResponse(candidates=[protos.Candidate(finish_reason=protos.Candidate.FinishReason.SAFETY)]),
    )
    generator = generators.ModelReadmeGenerator(api_key="secret")

    with pytest.raises(ModelResponseError) as exc_info:
        asyncio.run(generator.generate(["a.txt"], None))

    assert exc_info.value.model_name == "gemini-1.5-flash"
    assert isinstance(exc_info.value.__cause__, generation_types.StopCandidateException)


@pytest.mark.unit
def test_model_generator_blocked_prompt_raises(real_chat_answering: Any) -> None:  # noqa: ANN401
    feedback = protos.GenerateContentResponse.PromptFeedback(
        block_reason=protos.GenerateContentResponse.PromptFeedback.BlockReason.SAFETY,
    )
    real_chat_answering(protos.GenerateContentResponse(prompt_feedback=feedback))
    generator = generators.ModelReadmeGenerator(api_key="secret")

    with pytest.raises(ModelResponseError) as exc_info:
        asyncio.run(generator.generate(["a.txt"], None))

    assert isinstance(exc_info.value.__cause__, generation_types.BlockedPromptException)


@pytest.mark.unit
def test_model_generator_returns_text_through_chat_session(real_chat_answering: Any) -> None:  # noqa: ANN401
    content = protos.Content(role="model", parts=[protos.Part(text="# README real")])
    generate = real_chat_answering(
        protos.GenerateContentResponse(
            candidates=[protos.Candidate(content=content, finish_reason=protos.Candidate.FinishReason.STOP)],
        ),
    )
    generator = generators.ModelReadmeGenerator(api_key="secret")

    output = asyncio.run(generator.generate(["a.txt"], None))

    assert output == "# README real"
    generate.assert_awaited_once()


@pytest.mark.unit
def test_build_generator_follows_strategy() -> None:
    template = generators.build_generator(Settings(root=Path()))
    model = generators.build_generator(Settings(root=Path(), strategy=Strategy.MODEL, api_key="k"))

    assert isinstance(template, generators.TemplateReadmeGenerator)
    assert isinstance(model, generators.ModelReadmeGenerator)
    assert model.api_key == "k"
