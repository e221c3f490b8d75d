"""
LLM Interface Module
-------------------
Talks to a local Ollama server's chat API, including tool definitions.
"""

import logging

import httpx

from config.settings import LLM_CONFIG

logger = logging.getLogger(__name__)


class LLMInterface:
    """Interface for chatting with a local vision-capable model through Ollama."""

    def __init__(
        self,
        model: str | None = None,
        host: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the LLM interface.

        Args:
            model: Ollama model name (e.g. "mistral-small3.1")
            host: Base URL of the Ollama server
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.config = LLM_CONFIG["ollama"]
        self.model = model or self.config["model"]
        self.host = (host or self.config["host"]).rstrip("/")
        self.timeout = timeout or self.config["timeout"]
        self.transport = transport

        logger.info(f"Initialized LLM interface with model: {self.model} at {self.host}")

    def _client(self, timeout: float | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.host,
            timeout=timeout or self.timeout,
            transport=self.transport,
        )

    async def chat(self, messages: list[dict], tools: list[dict] | None = None) -> dict:
        """
        Send one non-streaming chat request.

        Args:
            messages: Conversation history in Ollama message format
            tools: Tool descriptors the model may call, or None

        Returns:
            The reply message dict (role, content and optionally tool_calls)
        """
        payload = {"model": self.model, "messages": messages, "stream": False}
        if tools:
            payload["tools"] = list(tools)

        logger.debug(
            f"Sending chat request to {self.model} with {len(messages)} messages"
            f"{' and tools' if tools else ''}"
        )

        try:
            async with self._client() as client:
                response = await client.post("/api/chat", json=payload)
                response.raise_for_status()
                data = response.json()
        except Exception as e:
            logger.error(f"Error calling Ollama chat API: {e}")
            raise

        message = data["message"]
        logger.debug(f"Ollama reply: {message}")
        return message

    async def list_models(self) -> list[str]:
        """List the models installed on the Ollama server."""
        async with self._client(timeout=5.0) as client:
            response = await client.get("/api/tags")
            response.raise_for_status()
            return [m["name"] for m in response.json().get("models", [])]

    async def is_available(self) -> bool:
        """Check that Ollama is reachable and the configured model is installed."""
        try:
            models = await self.list_models()
        except httpx.HTTPError as e:
            logger.warning(f"Ollama not available at {self.host}: {e}")
            return False

        # Ollama reports untagged models as "<name>:latest"
        installed = set(models) | {m.split(":")[0] for m in models if m.endswith(":latest")}
        if self.model not in installed:
            logger.warning(f"Model {self.model} is not installed. Run: ollama pull {self.model}")
            return False
        return True
