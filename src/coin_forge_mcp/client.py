"""Shared Gemini client with structured-output, image and speech helpers."""

from __future__ import annotations

import logging
import os
from typing import Any

from google import genai
from google.genai import types
from pydantic import BaseModel

from .config import VALID_THINKING_LEVELS, get_config
from .retry import with_retry

logger = logging.getLogger(__name__)


def _resolve_thinking_level(value: str) -> str:
    """Normalize and validate a thinking level string.

    Raises:
        ValueError: If the level is not in VALID_THINKING_LEVELS.
    """
    level = value.strip().lower()
    if level not in VALID_THINKING_LEVELS:
        allowed = ", ".join(sorted(VALID_THINKING_LEVELS))
        raise ValueError(f"Invalid thinking level '{value}'. Allowed: {allowed}")
    return level


def _text_config(
    thinking_level: str,
    temperature: float,
    *,
    system_instruction: str | None = None,
    response_schema: dict | None = None,
) -> types.GenerateContentConfig:
    """Build the request config for a text (optionally JSON-constrained) call."""
    config = types.GenerateContentConfig(
        thinking_config=types.ThinkingConfig(thinking_level=_resolve_thinking_level(thinking_level)),
        temperature=temperature,
        system_instruction=system_instruction or None,
    )
    if response_schema:
        config.response_mime_type = "application/json"
        config.response_json_schema = response_schema
    return config


def _inline_blobs(response: Any) -> list[types.Blob]:
    """Collect non-empty inline data parts from the first candidate."""
    if not response.candidates or response.candidates[0].content is None:
        return []
    parts = response.candidates[0].content.parts or []
    return [p.inline_data for p in parts if p.inline_data is not None and p.inline_data.data]


class GeminiClient:
    """Process-wide Gemini client pool (one client per API key)."""

    _clients: dict[str, genai.Client] = {}

    @classmethod
    def get(cls, api_key: str | None = None) -> genai.Client:
        """Return (or create) the shared client for *api_key*."""
        key = api_key or get_config().gemini_api_key or os.getenv("GEMINI_API_KEY", "")
        if not key:
            raise ValueError("No Gemini API key — set GEMINI_API_KEY or pass api_key explicitly")
        if key not in cls._clients:
            cls._clients[key] = genai.Client(api_key=key)
            logger.info("Created Gemini client (key …%s)", key[-4:])
        return cls._clients[key]

    @classmethod
    async def generate(
        cls,
        contents: Any,
        *,
        model: str | None = None,
        thinking_level: str | None = None,
        response_schema: dict | None = None,
        temperature: float | None = None,
        system_instruction: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate text, returning only the answer parts of the first candidate.

        Unset model, thinking level and temperature fall back to the live
        config, so ``infra_configure`` changes apply to the next call.
        """
        cfg = get_config()
        config = _text_config(
            thinking_level or cfg.default_thinking_level,
            cfg.default_temperature if temperature is None else temperature,
            system_instruction=system_instruction,
            response_schema=response_schema,
        )
        client = cls.get()
        response = await with_retry(
            lambda: client.aio.models.generate_content(
                model=model or cfg.default_model,
                contents=contents,
                config=config,
                **kwargs,
            )
        )

        # thought parts are dropped
        parts = response.candidates[0].content.parts if response.candidates else []
        answer = [p.text for p in parts or [] if p.text and not getattr(p, "thought", False)]
        return "\n".join(answer) if answer else (response.text or "")

    @classmethod
    async def generate_structured(
        cls,
        contents: Any,
        *,
        schema: type[BaseModel],
        model: str | None = None,
        thinking_level: str | None = None,
        system_instruction: str | None = None,
        **kwargs: Any,
    ) -> BaseModel:
        """Generate and validate into a Pydantic model via response_json_schema.

        Raises:
            pydantic.ValidationError: The response does not match *schema*.
        """
        raw = await cls.generate(
            contents,
            model=model,
            thinking_level=thinking_level,
            system_instruction=system_instruction,
            response_schema=schema.model_json_schema(),
            **kwargs,
        )
        return schema.model_validate_json(raw)

    @classmethod
    async def generate_image(cls, prompt: str, *, model: str | None = None) -> tuple[bytes, str]:
        """Generate one image and return ``(data, mime_type)``.

        Returns ``(b"", "")`` when the model answered without an image part.
        """
        resolved_model = model or get_config().image_model
        config = types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"])

        client = cls.get()
        response = await with_retry(
            lambda: client.aio.models.generate_content(
                model=resolved_model,
                contents=prompt,
                config=config,
            ),
            label="gemini-image",
        )
        images = [b for b in _inline_blobs(response) if (b.mime_type or "").startswith("image/")]
        if not images:
            return b"", ""
        return images[0].data, images[0].mime_type

    @classmethod
    async def generate_speech(
        cls,
        text: str,
        *,
        model: str | None = None,
        voice: str | None = None,
    ) -> bytes:
        """Synthesize *text* and return raw 16-bit mono PCM at 24 kHz.

        Returns ``b""`` when the model produced no audio.
        """
        cfg = get_config()
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice or cfg.tts_voice),
                ),
            ),
        )

        client = cls.get()
        response = await with_retry(
            lambda: client.aio.models.generate_content(
                model=model or cfg.tts_model,
                contents=text,
                config=config,
            ),
            label="gemini-tts",
        )
        blobs = _inline_blobs(response)
        return blobs[0].data if blobs else b""

    @classmethod
    async def close_all(cls) -> int:
        """Shut down all shared clients. Returns count closed."""
        count = 0
        for client in list(cls._clients.values()):
            try:
                await client.aio.aclose()
            except Exception:
                logger.debug("Async client close failed", exc_info=True)
            try:
                client.close()
            except Exception:
                logger.debug("Sync client close failed", exc_info=True)
            count += 1
        cls._clients.clear()
        logger.info("Closed %d Gemini client(s)", count)
        return count
