from __future__ import annotations

import functools
from abc import ABC
from collections.abc import Callable
from typing import Any

from loguru import logger

from tondex_paths.core.clients.protocols import ChainProvider, Sender
from tondex_paths.core.clients.ToncenterClient import ToncenterClient


def require_sender(fn: Callable) -> Callable:
    """Return ``(False, ...)`` early if ``self.sender`` is not set."""

    @functools.wraps(fn)
    async def wrapper(self: BaseAdapter, *args: Any, **kwargs: Any) -> Any:
        if getattr(self, "sender", None) is None:
            return False, "sender not configured"
        return await fn(self, *args, **kwargs)

    return wrapper


class BaseAdapter(ABC):
    """Holds the chain provider an adapter reads through and the sender it signs with.

    Without an injected provider a ``ToncenterClient`` is built from config and
    closed by ``close()``; an injected provider belongs to the caller.
    """

    adapter_type: str | None = None

    def __init__(
        self,
        name: str,
        config: dict[str, Any] | None = None,
        *,
        provider: ChainProvider | None = None,
        sender: Sender | None = None,
    ):
        self.name = name
        self.config = config or {}
        self.logger = logger.bind(adapter=self.__class__.__name__)
        self._owns_provider = provider is None
        self.provider: ChainProvider = provider or ToncenterClient()
        self.sender = sender

    async def close(self) -> None:
        if self._owns_provider and isinstance(self.provider, ToncenterClient):
            await self.provider.close()
