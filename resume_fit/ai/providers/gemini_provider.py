from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types

from resume_fit.core.config import settings


class GeminiProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ):
        self._model = model
        self._max_output_tokens = max_output_tokens or settings.llm_max_output_tokens
        key = (api_key or settings.gemini_api_key or "").strip()
        timeout = timeout_s if timeout_s is not None else settings.llm_timeout_s
        self._client: genai.Client | None = None
        if key:
            self._client = genai.Client(
                api_key=key,
                http_options=types.HttpOptions(timeout=int(timeout * 1000)),
            )

    async def generate_json(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        response_schema: dict[str, Any],
        temperature: float,
    ) -> str | None:
        if self._client is None:
            raise RuntimeError("Gemini API key is missing. Set GEMINI_API_KEY.")

        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                response_mime_type="application/json",
                response_schema=response_schema,
                temperature=temperature,
                max_output_tokens=self._max_output_tokens,
            ),
        )
        return response.text

    async def aclose(self) -> None:
        self._client = None
