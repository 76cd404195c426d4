"""AI backend boundary for generation tasks.

The orchestrator only knows the ``GenerationBackend`` protocol:
``invoke(template, inputs, output)`` turns a prompt-template id plus a
structured input into an instance of the declared output schema, or raises
``GenerationFailure``. ``GeminiBackend`` is the production implementation;
tests substitute their own.
"""

from __future__ import annotations

import base64
import io
import logging
import wave
from dataclasses import dataclass
from typing import Literal, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from .client import GeminiClient
from .errors import ErrorCategory, GenerationFailure
from .prompts import artifacts as prompts

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)

TemplateKind = Literal["text", "image", "speech"]


class GenerationBackend(Protocol):
    """Anything that can fulfil a generation task."""

    async def invoke(self, template: str, inputs: BaseModel, output: type[OutputT]) -> OutputT: ...


@dataclass(frozen=True)
class PromptTemplate:
    """A named prompt: how to render it and which Gemini modality answers it."""

    text: str
    kind: TemplateKind = "text"
    thinking_level: str | None = None
    media_field: str = ""

    def render(self, inputs: BaseModel) -> str:
        return self.text.format(**inputs.model_dump())


TEMPLATES: dict[str, PromptTemplate] = {
    "pitch_deck": PromptTemplate(prompts.PITCH_DECK),
    "tokenomics": PromptTemplate(prompts.TOKENOMICS),
    "community": PromptTemplate(prompts.COMMUNITY),
    "logo": PromptTemplate(prompts.LOGO, kind="image", media_field="logo_data_uri"),
    "whitepaper": PromptTemplate(prompts.WHITEPAPER, thinking_level="high"),
    "landing_page": PromptTemplate(prompts.LANDING_PAGE),
    "social_campaign": PromptTemplate(prompts.SOCIAL_CAMPAIGN, thinking_level="low"),
    "genesis_block": PromptTemplate(prompts.GENESIS_BLOCK, thinking_level="low"),
    "network_config": PromptTemplate(prompts.NETWORK_CONFIG, thinking_level="minimal"),
    "compilation": PromptTemplate(prompts.COMPILATION),
    "readme": PromptTemplate(prompts.README, thinking_level="low"),
    "install_script": PromptTemplate(prompts.INSTALL_SCRIPT, thinking_level="low"),
    "node_setup": PromptTemplate(prompts.NODE_SETUP),
    "audio_summary": PromptTemplate(prompts.AUDIO_SUMMARY, kind="speech", media_field="audio_data_uri"),
}


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a ``data:<mime>;base64,...`` URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def pcm_to_wav(pcm: bytes, *, channels: int = 1, rate: int = 24_000, sample_width: int = 2) -> bytes:
    """Wrap raw little-endian PCM (Gemini TTS output) in a WAV container."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(sample_width)
        wav.setframerate(rate)
        wav.writeframes(pcm)
    return buf.getvalue()


class GeminiBackend:
    """Fulfils generation tasks with Gemini structured output, image and TTS models."""

    def __init__(self, templates: dict[str, PromptTemplate] | None = None) -> None:
        self._templates = templates if templates is not None else TEMPLATES

    async def invoke(self, template: str, inputs: BaseModel, output: type[OutputT]) -> OutputT:
        """Render *template* with *inputs* and return a validated *output*.

        Raises:
            GenerationFailure: Unknown template, Gemini error, schema mismatch,
                or an empty media payload.
        """
        entry = self._templates.get(template)
        if entry is None:
            raise GenerationFailure(template, "unknown prompt template")

        try:
            prompt = entry.render(inputs)
        except (KeyError, ValueError) as exc:
            raise GenerationFailure(template, f"prompt rendering failed: {exc}") from exc

        try:
            if entry.kind == "image":
                return output.model_validate({entry.media_field: await self._image(template, prompt)})
            if entry.kind == "speech":
                return output.model_validate({entry.media_field: await self._speech(template, prompt)})
            result = await GeminiClient.generate_structured(
                prompt,
                schema=output,
                thinking_level=entry.thinking_level,
                system_instruction=prompts.FORGE_SYSTEM,
            )
        except GenerationFailure:
            raise
        except ValidationError as exc:
            raise GenerationFailure(
                template,
                f"response did not match {output.__name__}: {exc.error_count()} error(s)",
                category=ErrorCategory.SCHEMA_VALIDATION_FAILED,
            ) from exc
        except Exception as exc:
            raise GenerationFailure(template, str(exc) or type(exc).__name__) from exc

        if not isinstance(result, output):
            raise GenerationFailure(
                template,
                f"expected {output.__name__}, got {type(result).__name__}",
                category=ErrorCategory.SCHEMA_VALIDATION_FAILED,
            )
        return result

    async def _image(self, template: str, prompt: str) -> str:
        data, mime_type = await GeminiClient.generate_image(prompt)
        if not data:
            raise GenerationFailure(
                template,
                "Image generation failed to produce a result.",
                category=ErrorCategory.EMPTY_MEDIA,
            )
        logger.debug("%s: received %d bytes of %s", template, len(data), mime_type)
        return to_data_uri(data, mime_type or "image/png")

    async def _speech(self, template: str, prompt: str) -> str:
        pcm = await GeminiClient.generate_speech(prompt)
        if not pcm:
            raise GenerationFailure(
                template,
                "Audio generation failed to produce a result.",
                category=ErrorCategory.EMPTY_MEDIA,
            )
        return to_data_uri(pcm_to_wav(pcm), "audio/wav")
