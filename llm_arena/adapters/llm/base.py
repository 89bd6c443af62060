class LLMAdapter:
    name = "base"

    @property
    def ready(self) -> bool:
        return True

    async def complete(self, instruction: str, prompt: str) -> str:
        """Return the raw reply text. Raises RequestError when the call fails."""
        raise NotImplementedError
