"""Text generation client.

The pipeline depends only on the TextGenerator protocol. The default
implementation talks to a local Ollama server through LangChain.
"""

from collections.abc import AsyncIterator
from typing import Protocol

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_ollama import ChatOllama

from ..config import get_settings
from ..core import LLMError, get_logger

logger = get_logger(__name__)


class TextGenerator(Protocol):
    """A vendor-neutral text generation capability."""

    model: str

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        ...

    def stream(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: int,
        temperature: float,
    ) -> AsyncIterator[str]:
        ...


class OllamaTextGenerator:
    """TextGenerator backed by ChatOllama.

    JSON mode maps to Ollama's format="json", which constrains output to
    syntactically valid JSON. The output is still parsed and validated.
    """

    def __init__(self, model: str | None = None, base_url: str | None = None):
        """Initialize the generator.

        Args:
            model: Ollama model name. Defaults to settings value.
            base_url: Ollama API base URL. Defaults to settings value.
        """
        self.settings = get_settings()
        self.model = model or self.settings.generation_model
        self.base_url = base_url or self.settings.ollama_base_url
        self._llm_cache: dict[tuple[float, int, bool], ChatOllama] = {}

    def _get_or_create_llm(
        self,
        temperature: float,
        max_output_tokens: int,
        json_mode: bool,
    ) -> ChatOllama:
        """Get or create a cached LLM instance for one call configuration."""
        key = (temperature, max_output_tokens, json_mode)
        if key not in self._llm_cache:
            kwargs = {
                "model": self.model,
                "base_url": self.base_url,
                "temperature": temperature,
                "num_ctx": self.settings.ollama_num_ctx,
                "num_predict": max_output_tokens,
            }
            if json_mode:
                kwargs["format"] = "json"
            self._llm_cache[key] = ChatOllama(**kwargs)
            logger.info(
                "Created LLM instance",
                model=self.model,
                temperature=temperature,
                num_predict=max_output_tokens,
                json_mode=json_mode,
            )
        return self._llm_cache[key]

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        """Generate a completion.

        Raises:
            LLMError: If the model call fails
        """
        llm = self._get_or_create_llm(temperature, max_output_tokens, json_mode)
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]

        try:
            response = await llm.ainvoke(messages)
        except Exception as e:
            logger.error("LLM call failed", model=self.model, error=str(e))
            raise LLMError(str(e), self.model) from e

        content = response.content
        return content if isinstance(content, str) else ""

    async def stream(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: int,
        temperature: float,
    ) -> AsyncIterator[str]:
        """Stream a completion as text chunks.

        Raises:
            LLMError: If the model call fails
        """
        llm = self._get_or_create_llm(temperature, max_output_tokens, False)
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]

        try:
            async for chunk in llm.astream(messages):
                if isinstance(chunk.content, str) and chunk.content:
                    yield chunk.content
        except Exception as e:
            logger.error("LLM stream failed", model=self.model, error=str(e))
            raise LLMError(str(e), self.model) from e


# Singleton instances, one per model
_generators: dict[str, OllamaTextGenerator] = {}


def get_text_generator(model: str | None = None) -> OllamaTextGenerator:
    """Get the shared generator for a model (defaults to the generation model)."""
    model = model or get_settings().generation_model
    if model not in _generators:
        _generators[model] = OllamaTextGenerator(model=model)
    return _generators[model]
