from __future__ import annotations

from collections.abc import Sequence

from loguru import logger
from pytoniq_core import Address

from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.errors import RemoteCallError, TonDexError
from tondex_paths.core.utils.ton import AddressLike, StackArg, StackReader, to_address


class OnChainEntity:
    """A contract known only by its address.

    Role-specific behaviour is layered on by the wrappers that build on this;
    instances hold no mutable state and can be shared between concurrent calls.
    """

    def __init__(self, address: AddressLike):
        self._address = to_address(address)
        self.logger = logger.bind(contract=self.__class__.__name__)

    @property
    def address(self) -> Address:
        return self._address

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._address.to_str()})"

    async def call_get_method(
        self,
        provider: ChainProvider,
        method: str,
        args: Sequence[StackArg] = (),
    ) -> StackReader:
        address = self._address.to_str()
        self.logger.debug(f"get-method {method} on {address}")
        try:
            stack = await provider.run_get_method(self._address, method, list(args))
        except TonDexError:
            raise
        except Exception as exc:
            raise RemoteCallError(
                f"{method} on {address} failed: {exc}", address=address, method=method
            ) from exc
        return StackReader(stack, address=address, method=method)
