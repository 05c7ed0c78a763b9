from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from pytoniq_core import Address

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.utils.ton import StackArg, StackEntry


class ChainProvider(Protocol):
    """Runs read-only get-methods.

    Results are normalised: numbers come back as ``int``, cells and slices as
    ``pytoniq_core.Cell``.
    """

    async def run_get_method(
        self,
        address: Address | str,
        method: str,
        stack: Sequence[StackArg] | None = None,
    ) -> list[StackEntry]: ...


class Sender(Protocol):
    """Signs and broadcasts a prepared message; nothing in this package signs."""

    async def send(self, tx_params: TxParams) -> Any: ...
