"""Firebase Cloud Messaging listener.

`initialize_app(config)` binds the process to one messaging project and returns a
`MessagingApp` handle. The handle runs an `FcmPushClient` on a daemon thread with
its own asyncio loop and forwards every decrypted push to a callback.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

from firebase_messaging import FcmPushClient, FcmRegisterConfig

log = logging.getLogger(__name__)


class InitializationError(RuntimeError):
    """Invalid, missing, or conflicting messaging project configuration."""


@dataclass(frozen=True)
class MessagingConfig:
    api_key: str
    auth_domain: str
    project_id: str
    storage_bucket: str
    messaging_sender_id: str
    app_id: str

    @classmethod
    def from_namespace(cls, ns: object) -> "MessagingConfig":
        return cls(
            api_key=str(getattr(ns, "api_key", "")),
            auth_domain=str(getattr(ns, "auth_domain", "")),
            project_id=str(getattr(ns, "project_id", "")),
            storage_bucket=str(getattr(ns, "storage_bucket", "")),
            messaging_sender_id=str(getattr(ns, "messaging_sender_id", "")),
            app_id=str(getattr(ns, "app_id", "")),
        )

    def validate(self) -> None:
        missing = [name for name, value in asdict(self).items() if not value.strip()]
        if missing:
            raise InitializationError(f"Missing messaging configuration: {', '.join(missing)}")

    def to_register_config(self) -> FcmRegisterConfig:
        return FcmRegisterConfig(
            project_id=self.project_id,
            app_id=self.app_id,
            api_key=self.api_key,
            messaging_sender_id=self.messaging_sender_id,
        )


class MessagingApp:
    """Handle returned by initialize_app; owns the listener thread."""

    def __init__(self, config: MessagingConfig, client_factory: Callable[..., Any] = FcmPushClient) -> None:
        self.config = config
        self._client_factory = client_factory
        self._client: Any = None
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._stop_requested = threading.Event()
        self._on_message: Optional[Callable[[Any], None]] = None
        self.token: Optional[str] = None

    def is_listening(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def listen(
        self,
        on_message: Callable[[Any], None],
        on_token: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        """Start receiving pushes in the background. Callbacks run on the listener thread."""
        if self.is_listening():
            raise RuntimeError("Messaging listener already running")
        self._on_message = on_message
        # Created up front so stop() can reach the listener before it runs
        self._stop_requested.clear()
        self._loop = asyncio.new_event_loop()
        self._stop_event = asyncio.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(on_token, on_error),
            name="pushrelay-fcm",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return
        self._stop_requested.set()
        loop, stop_event = self._loop, self._stop_event
        if loop is not None and stop_event is not None and not loop.is_closed():
            try:
                loop.call_soon_threadsafe(stop_event.set)
            except RuntimeError:
                # Loop already shut down on its own
                pass
        thread.join(timeout)
        if thread.is_alive():
            log.warning("Messaging listener did not stop within %.1fs", timeout)
        else:
            self._thread = None

    def _run(self, on_token: Optional[Callable[[str], None]], on_error: Optional[Callable[[BaseException], None]]) -> None:
        loop = self._loop
        assert loop is not None
        asyncio.set_event_loop(loop)
        try:
            loop.run_until_complete(self._serve(on_token, on_error))
        finally:
            loop.close()

    async def _serve(self, on_token: Optional[Callable[[str], None]], on_error: Optional[Callable[[BaseException], None]]) -> None:
        if self._stop_requested.is_set():
            return
        try:
            self._client = self._client_factory(self._on_push, self.config.to_register_config())
            token = await self._client.checkin_or_register()
            if self._stop_requested.is_set():
                log.info("Messaging listener stopped before start")
                return
            await self._client.start()
        except Exception as e:
            log.error("Messaging initialization failed for project %s: %s", self.config.project_id, e)
            if on_error is not None:
                on_error(e)
            return

        self.token = token
        log.info("Listening for push messages (project %s)", self.config.project_id)
        if on_token is not None and token:
            on_token(token)

        assert self._stop_event is not None
        await self._stop_event.wait()
        try:
            await self._client.stop()
        except Exception as e:
            log.warning("Error while stopping messaging client: %s", e)
        log.info("Messaging listener stopped")

    def _on_push(self, payload: Any, persistent_id: str, context: Any = None) -> None:
        log.info("Received background message %s: %s", persistent_id, payload)
        if self._on_message is not None:
            self._on_message(payload)


_app: Optional[MessagingApp] = None
_app_lock = threading.Lock()


def initialize_app(config: MessagingConfig, client_factory: Callable[..., Any] = FcmPushClient) -> MessagingApp:
    """Bind the process to a messaging project; safe to call again with the same config."""
    global _app
    with _app_lock:
        if _app is not None:
            if _app.config != config:
                raise InitializationError(
                    f"Messaging already initialized for project {_app.config.project_id}"
                )
            return _app
        config.validate()
        _app = MessagingApp(config, client_factory=client_factory)
        log.debug("Initialized messaging for project %s", config.project_id)
        return _app


def get_app() -> MessagingApp:
    if _app is None:
        raise InitializationError("Messaging has not been initialized")
    return _app
