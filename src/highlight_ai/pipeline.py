"""Trigger handling: capture the selection, ask the user, call the model."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Protocol

from highlight_ai.client import LMClient
from highlight_ai.config import load_config, save_config
from highlight_ai.errors import CompletionError
from highlight_ai.models import AppConfig
from highlight_ai.prompt import build_prompt
from highlight_ai.selection import ClipboardBackend, SelectionCapture

log = logging.getLogger(__name__)

TriggerOutcome = Literal["busy", "no_selection", "dismissed", "completed", "failed"]


@dataclass
class PresentationRequest:
    """What the user asked for after seeing the selection."""

    action: str | None = None
    instruction: str | None = None


class Presenter(Protocol):
    """Presentation layer driven by the pipeline."""

    def notify_no_selection(self) -> None: ...

    async def present(self, selection: str) -> PresentationRequest | None: ...

    def show_result(self, text: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def close(self) -> None: ...


class Pipeline:
    """Own the active client and the in-flight state for one process.

    At most one trigger cycle runs at a time; triggers arriving while a
    cycle is in flight are ignored. Saving the configuration swaps in a
    fresh client, so a request already in flight finishes with the client
    it started with.
    """

    def __init__(
        self,
        presenter: Presenter,
        *,
        config_path: Path | None = None,
        backend: ClipboardBackend | None = None,
        client_factory: Callable[[AppConfig], LMClient] = LMClient,
    ) -> None:
        self._presenter = presenter
        self._config_path = config_path
        self._client_factory = client_factory
        self._capture = SelectionCapture(backend)
        self._in_flight = False
        self._config = load_config(config_path)
        self._client = client_factory(self._config)
        log.debug("pipeline ready: %s", self._config.to_record())

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def client(self) -> LMClient:
        return self._client

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def reload_config(self) -> AppConfig:
        """Re-read the configuration into a new client."""
        self._config = load_config(self._config_path)
        self._client = self._client_factory(self._config)
        log.info("client reloaded: %s", self._config.to_record())
        return self._config

    def save_config(self, candidate: Mapping[str, Any]) -> AppConfig:
        """Persist a configuration and switch to it. Raises ``ConfigIOError``."""
        save_config(candidate, self._config_path)
        return self.reload_config()

    async def trigger(self) -> TriggerOutcome:
        """Run one capture → present → complete cycle."""
        if self._in_flight:
            log.debug("trigger ignored, a cycle is already in flight")
            return "busy"

        self._in_flight = True
        try:
            return await self._run_cycle()
        finally:
            await self._capture.wait_for_restore()
            self._in_flight = False

    async def _run_cycle(self) -> TriggerOutcome:
        self._presenter.close()

        selection = await self._capture.capture()
        if not selection.strip():
            log.info("no text selected")
            self._presenter.notify_no_selection()
            return "no_selection"

        request = await self._presenter.present(selection)
        if request is None:
            return "dismissed"

        client = self._client
        try:
            prompt = build_prompt(selection, request.action, request.instruction)
            reply = await client.send_chat(prompt)
        except (CompletionError, ValueError) as e:
            log.warning("completion failed: %s", e)
            self._presenter.show_error(str(e))
            return "failed"

        self._presenter.show_result(reply)
        return "completed"
