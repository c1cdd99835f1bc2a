"""
Session stores: where the host keeps the current session id.

The client never touches cookies or storage itself. A store is any object
with get(name), set(name, value) and clear(name); each method may be a plain
function or a coroutine function.
"""

import inspect
import logging
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "log-tracker-session"


class SessionStore(Protocol):
    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: str) -> Any: ...

    def clear(self, name: str) -> Any: ...


async def maybe_await(value):
    """Await value if the store returned an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


class InMemorySessionStore:
    """Process-local store, useful for scripts and tests."""

    def __init__(self):
        self.values: dict[str, str] = {}

    def get(self, name: str) -> Optional[str]:
        return self.values.get(name)

    def set(self, name: str, value: str):
        self.values[name] = value

    def clear(self, name: str):
        self.values.pop(name, None)


class CallbackSessionStore:
    """
    Adapts the host's cookie hooks to the store interface.

    clear_session_cookie is optional; without it clearing writes an empty
    value, which reads back as "no session".
    """

    def __init__(
        self,
        set_session_cookie: Callable[[str, str], Any],
        get_session_cookie: Callable[[str], Any],
        clear_session_cookie: Optional[Callable[[str], Any]] = None,
    ):
        self._set = set_session_cookie
        self._get = get_session_cookie
        self._clear = clear_session_cookie

    def get(self, name: str):
        return self._get(name)

    def set(self, name: str, value: str):
        return self._set(name, value)

    def clear(self, name: str):
        if self._clear is not None:
            return self._clear(name)
        return self._set(name, "")
