"""Chat-completion client for a local OpenAI-compatible inference server."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from highlight_ai.errors import (
    CompletionError,
    CompletionTimeoutError,
    EmptyResponseError,
    ProtocolError,
    ResponseParseError,
    TransportError,
)
from highlight_ai.models import AppConfig, ChatMessage

log = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30.0
CHECK_TIMEOUT_SECONDS = 5.0
TEMPERATURE = 0.7


def _describe(error: BaseException) -> str:
    """Return a one-line description, unwrapping single-member exception groups."""
    while isinstance(error, BaseExceptionGroup) and len(error.exceptions) == 1:
        error = error.exceptions[0]
    return str(error) or type(error).__name__


class LMClient:
    """Send single-turn chat requests to the configured endpoint.

    One attempt per call, no retries. Failures are raised as
    ``CompletionError`` subclasses.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = config.base_url
        self.model_name = config.model_name
        self.timeout = timeout
        self._transport = transport

    @property
    def chat_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        messages: list[ChatMessage] = [{"role": "user", "content": prompt}]
        return {
            "model": self.model_name,
            "messages": messages,
            "temperature": TEMPERATURE,
            "stream": False,
        }

    def http_client(self, timeout: float) -> httpx.AsyncClient:
        """Return an ``httpx.AsyncClient`` bound to this client's transport."""
        return httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=self._transport)

    async def send_chat(self, prompt: str) -> str:
        """Send prompt as a user message and return the model's reply verbatim."""
        payload = self.build_payload(prompt)
        log.debug("POST %s", self.chat_url)
        log.debug("request body: %s...", json.dumps(payload)[:100])

        try:
            async with self.http_client(self.timeout) as client:
                response = await client.post(
                    self.chat_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException as e:
            log.warning("request to %s timed out: %s", self.chat_url, e)
            raise CompletionTimeoutError(self.base_url, self.timeout) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            log.warning("request to %s failed: %r", self.chat_url, e)
            raise TransportError(self.base_url, str(e) or type(e).__name__) from e
        except Exception as e:
            # Out-of-range ports pass URL parsing and fail inside the socket connect.
            log.warning("request to %s failed: %r", self.chat_url, e)
            raise TransportError(self.base_url, _describe(e)) from e

        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> str:
        if not response.is_success:
            log.warning("HTTP error %d: %s", response.status_code, response.text[:200])
            raise ProtocolError(response.status_code, response.reason_phrase, response.text)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log.warning("could not parse response body: %s", response.text[:200])
            raise ResponseParseError(str(e)) from e

        choices = data.get("choices") if isinstance(data, dict) else None
        count = len(choices) if isinstance(choices, list) else 0
        log.debug("response received, choices: %d", count)
        if not isinstance(choices, list) or not choices:
            raise EmptyResponseError(json.dumps(data)[:200])

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise EmptyResponseError("first choice has no message content")
        return content

    def send_chat_sync(self, prompt: str) -> str:
        """Blocking wrapper around ``send_chat`` for callers without an event loop."""
        return asyncio.run(self.send_chat(prompt))


@dataclass
class CheckResult:
    """Outcome of one setup check."""

    name: str
    ok: bool
    message: str


async def check_setup(
    config: AppConfig, *, transport: httpx.AsyncBaseTransport | None = None
) -> list[CheckResult]:
    """Check that the inference server is reachable and the model answers."""
    client = LMClient(config, transport=transport)
    models_url = f"{config.base_url.rstrip('/')}/models"
    results: list[CheckResult] = []

    try:
        async with client.http_client(CHECK_TIMEOUT_SECONDS) as http:
            response = await http.get(models_url)
    except httpx.TimeoutException:
        results.append(
            CheckResult("server", False, f"No answer from {config.base_url} within 5 seconds")
        )
        return results
    except Exception as e:
        log.debug("server check failed: %r", e)
        results.append(
            CheckResult(
                "server",
                False,
                f"Could not connect to {config.base_url}. "
                f"Make sure the server is started. ({_describe(e)})",
            )
        )
        return results
    results.append(
        CheckResult(
            "server",
            True,
            f"Server is running at {config.base_url} (HTTP {response.status_code})",
        )
    )

    try:
        reply = await client.send_chat("Hello")
    except CompletionError as e:
        results.append(CheckResult("model", False, f"{config.model_name}: {e}"))
    else:
        results.append(
            CheckResult("model", True, f"{config.model_name} is working: {reply[:50]}")
        )
    return results
