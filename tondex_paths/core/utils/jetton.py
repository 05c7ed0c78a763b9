"""TEP-74 jetton helpers shared by every DEX revision."""

from __future__ import annotations

from pytoniq_core import Address, Cell, begin_cell

from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.base import DEFAULT_QUERY_ID, JETTON_TRANSFER_OP
from tondex_paths.core.utils.contract import OnChainEntity
from tondex_paths.core.utils.ton import (
    AddressLike,
    named_slice_arg,
    to_address,
    to_optional_address,
)
from tondex_paths.core.utils.units import to_coins


def create_jetton_transfer_message(
    *,
    amount: int,
    destination: AddressLike,
    forward_ton_amount: int,
    query_id: int = DEFAULT_QUERY_ID,
    response_destination: AddressLike | None = None,
    custom_payload: Cell | None = None,
    forward_payload: Cell | None = None,
) -> Cell:
    """Build a ``transfer#0f8a7ea5`` body.

    ``forward_payload`` is always stored by reference (the right branch of
    ``Either Cell ^Cell``); a missing response destination is written as addr_none.
    """
    builder = (
        begin_cell()
        .store_uint(JETTON_TRANSFER_OP, 32)
        .store_uint(query_id, 64)
        .store_coins(to_coins(amount))
        .store_address(to_address(destination))
        .store_address(to_optional_address(response_destination))
    )

    if custom_payload is not None:
        builder.store_uint(1, 1).store_ref(custom_payload)
    else:
        builder.store_uint(0, 1)

    builder.store_coins(to_coins(forward_ton_amount))

    if forward_payload is not None:
        builder.store_uint(1, 1).store_ref(forward_payload)
    else:
        builder.store_uint(0, 1)

    return builder.end_cell()


class JettonMinter(OnChainEntity):
    async def get_wallet_address(
        self, provider: ChainProvider, owner: AddressLike
    ) -> Address:
        stack = await self.call_get_method(
            provider, "get_wallet_address", [named_slice_arg(owner)]
        )
        return stack.read_address()
