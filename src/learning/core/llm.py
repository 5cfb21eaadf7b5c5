from abc import ABC, abstractmethod


class LLM(ABC):
    """
    Text-generation provider used for quiz advice, learning paths and doubts.
    Calls may be slow or fail; callers bound them with asyncio.wait_for.
    """

    model: str = ""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        raise NotImplementedError

    @abstractmethod
    async def agenerate(self, prompt: str) -> str:
        raise NotImplementedError
