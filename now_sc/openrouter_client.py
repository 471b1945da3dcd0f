"""Async client for the OpenRouter chat-completions API.

Sends a prompt template as the system message and the user's input as the
user message, and returns the text of the first choice.

Typical usage::

    client = OpenRouterClient(api_key=os.environ["OPENROUTER_API_KEY"])
    text = await client.execute_prompt(template_text, "Summarise the call notes")
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, Field, ValidationError

from .config import DEFAULT_MODEL, OPENROUTER_API_URL, OPENROUTER_REFERER, OPENROUTER_TITLE
from .errors import OpenRouterError

FALLBACK_USER_INPUT = "Please provide guidance based on the system prompt."


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    """Body of a chat-completions request."""

    model: str
    messages: list[ChatMessage]


class _ChoiceMessage(BaseModel):
    content: str | None = ""


class _Choice(BaseModel):
    message: _ChoiceMessage = Field(default_factory=_ChoiceMessage)


class ChatResponse(BaseModel):
    """The part of a chat-completions response that we read."""

    choices: list[_Choice] = Field(default_factory=list)


class OpenRouterClient:
    """Async client for ``/api/v1/chat/completions``.

    *transport* lets tests plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        url: str = OPENROUTER_API_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        referer: str = OPENROUTER_REFERER,
        title: str = OPENROUTER_TITLE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.referer = referer
        self.title = title
        self._transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

    def build_request(self, prompt_content: str, user_input: str) -> ChatRequest:
        """Build the two-message request; blank input gets a stock instruction."""
        return ChatRequest(
            model=self.model,
            messages=[
                ChatMessage(role="system", content=prompt_content),
                ChatMessage(role="user", content=user_input or FALLBACK_USER_INPUT),
            ],
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def execute_prompt(self, prompt_content: str, user_input: str) -> str:
        """Run *prompt_content* against the model and return the reply text.

        Raises:
            OpenRouterError: On transport failures, non-200 answers (with the
                status code and raw body), undecodable bodies, or a response
                without choices.
        """
        payload = self.build_request(prompt_content, user_input).model_dump()

        try:
            async with self._client() as client:
                response = await client.post(self.url, json=payload, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise OpenRouterError(f"request timed out after {self.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise OpenRouterError(f"failed to execute request: {exc}") from exc

        if response.status_code != 200:
            raise OpenRouterError(
                f"OpenRouter API error (status {response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            parsed = ChatResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise OpenRouterError(
                f"failed to decode response: {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        if not parsed.choices:
            raise OpenRouterError(
                "no response from API",
                status_code=response.status_code,
                body=response.text,
            )

        return parsed.choices[0].message.content or ""
