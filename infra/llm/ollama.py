import logging
import time

import httpx
from langchain_ollama import OllamaLLM as LangChainOllamaLLM

from learning.core.llm import LLM

logger = logging.getLogger(__name__)


class OllamaLLM(LLM):
    def __init__(self, model: str, temperature: float = 0.7, base_url: str = "http://localhost:11434"):
        # Avoid infinite recursion: this wrapper is `OllamaLLM`, the LangChain class is aliased.
        self.model = model
        self.base_url = base_url
        self._llm = LangChainOllamaLLM(model=model, temperature=temperature, base_url=base_url)

    def generate(self, prompt: str) -> str:
        return self._llm.invoke(prompt)

    async def agenerate(self, prompt: str) -> str:
        """
        Single completion. No timeout here: callers wrap this in asyncio.wait_for
        so the bound is chosen per use (advisor vs. doubt resolution).
        """
        start_time = time.time()
        input_tokens = len(prompt) // 4  # Rough estimate
        logger.debug("LLM call starting: model=%s ~%s input tokens", self.model, input_tokens)
        try:
            text = await self._llm.ainvoke(prompt)
        except Exception as e:
            logger.error("LLM call failed after %.2fs: %s", time.time() - start_time, e)
            raise
        elapsed = time.time() - start_time
        logger.info("LLM call completed in %.2fs (~%s in, ~%s out)", elapsed, input_tokens, len(text or "") // 4)
        if elapsed > 60:
            logger.warning("LLM call took %.2fs - consider a smaller model than %s", elapsed, self.model)
        return text

    async def is_available(self, timeout: float = 5.0) -> bool:
        """Ping the Ollama tags endpoint; False when the server is down or unhealthy."""
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.get(f"{self.base_url.rstrip('/')}/api/tags")
        except httpx.HTTPError as e:
            logger.warning("Ollama connection check failed: %s. Is Ollama running?", e)
            return False
        return response.status_code == 200
