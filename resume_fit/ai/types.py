from typing import Any, Protocol


class AIClient(Protocol):
    async def generate_json(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        response_schema: dict[str, Any],
        temperature: float,
    ) -> str | None: ...

    async def aclose(self) -> None: ...
