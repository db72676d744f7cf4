"""AI client — pass-through to an OpenAI-compatible chat-completion API.

Two call styles:

    AIClient.generate()         — one POST, returns choices[0].message.content.
    AIClient.stream()           — POST with stream=true, yields StreamEvent
                                  objects parsed from the server-sent events:
                                  one "delta" per content fragment, then one
                                  "done" carrying the accumulated text.

generate_stream() wraps stream() for callers that want a callback per event
plus the full text at the end. The HTTP layer iterates stream() itself and
republishes each event as a server-sent event.

No timeout is configured and nothing is retried: a failed request or a
non-2xx status raises AIError straight back to the caller.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx

from resource_manager.models import AIServiceConfig, StreamEvent

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


# ---------------------------------------------------------------------------
# Request building and response parsing
# ---------------------------------------------------------------------------

def build_request_body(
    config: AIServiceConfig,
    system_prompt: str,
    user_prompt: str,
    stream: bool,
) -> dict[str, Any]:
    """Return the chat-completion body. max_tokens is sent only when > 0."""
    body: dict[str, Any] = {
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "model": config.model,
        "temperature": config.temperature,
        "stream": stream,
    }
    if config.max_tokens > 0:
        body["max_tokens"] = config.max_tokens
    return body


def _dig(data: Any, *keys: str | int) -> Any:
    for key in keys:
        try:
            data = data[key]
        except (KeyError, IndexError, TypeError):
            return None
    return data


def parse_message_content(data: Any) -> str:
    """Extract choices[0].message.content from a non-streamed response."""
    content = _dig(data, "choices", 0, "message", "content")
    if not isinstance(content, str):
        raise AIError("AI returned no content")
    return content


def parse_delta_line(line: str) -> str | None:
    """Return the content fragment carried by one SSE data line.

    Returns None for lines that carry nothing: blanks, comments, other SSE
    fields, unparsable JSON, and chunks without choices[0].delta.content.
    The [DONE] sentinel is handled by the caller.
    """
    if not line.startswith(DATA_PREFIX):
        return None
    try:
        parsed = json.loads(line[len(DATA_PREFIX):])
    except json.JSONDecodeError:
        logger.debug("skipping unparsable stream line: %.80s", line)
        return None
    content = _dig(parsed, "choices", 0, "delta", "content")
    return content if isinstance(content, str) else None


# ---------------------------------------------------------------------------
# AIClient
# ---------------------------------------------------------------------------

class AIClient:
    """Async HTTP client for one configured chat-completion service.

    Args:
        config:    Service URL, key, model and sampling settings.
        transport: Optional httpx transport; tests pass an httpx.MockTransport.
    """

    def __init__(
        self,
        config: AIServiceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._url = f"{config.base_url.rstrip('/')}/chat/completions"
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=None, transport=self._transport)

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        body = build_request_body(self._config, system_prompt, user_prompt, stream=False)
        logger.debug("ai generate url=%s model=%s", self._url, self._config.model)

        async with self._client() as client:
            try:
                resp = await client.post(self._url, json=body, headers=self._headers())
            except httpx.HTTPError as e:
                raise AIError(f"AI request failed: {e}") from e
            if not resp.is_success:
                raise AIError(
                    f"AI API returned error {resp.status_code}: {resp.text}"
                )
            try:
                data = resp.json()
            except ValueError as e:
                raise AIError(f"Failed to parse AI response: {e}") from e

        return parse_message_content(data)

    async def stream(
        self, system_prompt: str, user_prompt: str
    ) -> AsyncIterator[StreamEvent]:
        """Yield delta events as they arrive, then a single done event."""
        body = build_request_body(self._config, system_prompt, user_prompt, stream=True)
        logger.debug(
            "ai stream url=%s model=%s max_tokens=%d",
            self._url, self._config.model, self._config.max_tokens,
        )

        async with self._client() as client:
            request = client.build_request(
                "POST", self._url, json=body, headers=self._headers()
            )
            try:
                resp = await client.send(request, stream=True)
            except httpx.HTTPError as e:
                raise AIError(f"AI request failed: {e}") from e

            full_content: list[str] = []
            try:
                logger.debug("ai stream response status=%d", resp.status_code)
                if not resp.is_success:
                    await resp.aread()
                    raise AIError(
                        f"AI API returned error {resp.status_code}: {resp.text}"
                    )

                async for fragment in _iter_deltas(resp):
                    full_content.append(fragment)
                    yield StreamEvent(type="delta", content=fragment)
            finally:
                await resp.aclose()

        yield StreamEvent(type="done", content="".join(full_content))

    async def generate_stream(
        self,
        system_prompt: str,
        user_prompt: str,
        emit: Callable[[StreamEvent], Any] | None = None,
    ) -> str:
        """Drive stream(), handing every event to emit. Returns the full text."""
        full_text = ""
        async for event in self.stream(system_prompt, user_prompt):
            if emit is not None:
                emit(event)
            if event.type == "done":
                full_text = event.content
        return full_text


async def _iter_deltas(resp: httpx.Response) -> AsyncIterator[str]:
    """Yield content fragments from the SSE lines of a streamed response.

    Stops at the [DONE] sentinel without reading further chunks. A transport
    error mid-stream ends the stream; what was received so far stands.
    """
    try:
        async for raw in resp.aiter_lines():
            line = raw.strip()
            if line == DATA_PREFIX + DONE_SENTINEL:
                return
            fragment = parse_delta_line(line)
            if fragment is not None:
                yield fragment
    except httpx.HTTPError as e:
        logger.warning("ai stream interrupted: %s", e)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class AIError(RuntimeError):
    """Raised when the AI service cannot be reached or returns an error."""
