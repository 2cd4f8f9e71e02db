from dataclasses import dataclass

from resume_fit.core.config import settings

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.5-pro",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str


def load_ai_config() -> AIConfig:
    provider = settings.ai_provider
    model = (settings.ai_model or DEFAULT_MODELS.get(provider, "")).strip()
    return AIConfig(provider=provider, model=model)
