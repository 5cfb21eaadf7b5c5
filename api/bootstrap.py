from functools import lru_cache

from api.config import settings
from infra.llm.ollama import OllamaLLM
from learning.core.llm import LLM


@lru_cache
def build_text_generator() -> LLM:
    """Single provider instance per process; the LangChain client is safe to share."""
    return OllamaLLM(
        model=settings.ollama_model,
        temperature=settings.ollama_temperature,
        base_url=settings.ollama_base_url,
    )


def get_text_generator() -> LLM:
    """FastAPI dependency. Tests replace it through app.dependency_overrides."""
    return build_text_generator()
