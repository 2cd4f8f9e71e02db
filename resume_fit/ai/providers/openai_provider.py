from __future__ import annotations

import copy
from typing import Any, Optional

from openai import AsyncOpenAI

from resume_fit.core.config import settings

_UNSUPPORTED_STRICT_KEYWORDS = ("minimum", "maximum")


def strict_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Adapt a plain JSON schema to OpenAI structured-output strict mode.

    Strict mode wants every object closed and every property listed as required.
    """
    adapted = copy.deepcopy(schema)

    def visit(node: Any) -> None:
        if isinstance(node, dict):
            for keyword in _UNSUPPORTED_STRICT_KEYWORDS:
                node.pop(keyword, None)
            if node.get("type") == "object" and isinstance(node.get("properties"), dict):
                node["additionalProperties"] = False
                node["required"] = list(node["properties"].keys())
            for value in node.values():
                visit(value)
        elif isinstance(node, list):
            for value in node:
                visit(value)

    visit(adapted)
    return adapted


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_retries: Optional[int] = None,
        max_output_tokens: Optional[int] = None,
    ):
        self._model = model
        self._max_output_tokens = max_output_tokens or settings.llm_max_output_tokens
        key = (api_key or settings.openai_api_key or "").strip()
        # A missing key is reported on first use, not at startup.
        self._client: AsyncOpenAI | None = None
        if key:
            self._client = AsyncOpenAI(
                api_key=key,
                base_url=(base_url or settings.openai_base_url or None),
                timeout=timeout_s if timeout_s is not None else settings.llm_timeout_s,
                max_retries=max_retries if max_retries is not None else settings.llm_max_retries,
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
            raise RuntimeError("OpenAI API key is missing. Set OPENAI_API_KEY.")

        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=self._max_output_tokens,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "resume_analysis",
                    "schema": strict_json_schema(response_schema),
                    "strict": True,
                },
            },
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
