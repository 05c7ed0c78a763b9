"""Read-only address derivation shared by every revision.

Each function takes the ``slice_arg`` encoder of the calling revision, so the
v1 positional and v2+ named get-method conventions never mix. Independent
lookups are gathered; a lookup that needs another's result awaits it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TypeAlias

from pytoniq_core import Address

from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.utils.contract import OnChainEntity
from tondex_paths.core.utils.jetton import JettonMinter
from tondex_paths.core.utils.ton import (
    AddressLike,
    StackArg,
    is_hole_address,
    named_slice_arg,
)

SliceArg: TypeAlias = Callable[[AddressLike], StackArg]


def absent_to_none(address: Address | None) -> Address | None:
    """addr_none and the all-zero address both mean "not deployed"."""
    if address is None or is_hole_address(address):
        return None
    return address


async def get_jetton_wallet_address(
    provider: ChainProvider, minter: AddressLike, owner: AddressLike
) -> Address:
    return await JettonMinter(minter).get_wallet_address(provider, owner)


async def get_jetton_wallet_addresses(
    provider: ChainProvider, *lookups: tuple[AddressLike, AddressLike]
) -> list[Address]:
    """Resolve several ``(minter, owner)`` wallets concurrently, in order."""
    return list(
        await asyncio.gather(
            *(
                get_jetton_wallet_address(provider, minter, owner)
                for minter, owner in lookups
            )
        )
    )


async def get_pool_address(
    provider: ChainProvider,
    router: OnChainEntity,
    *,
    token0: AddressLike,
    token1: AddressLike,
    slice_arg: SliceArg,
) -> Address | None:
    stack = await router.call_get_method(
        provider, "get_pool_address", [slice_arg(token0), slice_arg(token1)]
    )
    return absent_to_none(stack.read_address_opt())


async def get_pool_address_by_jetton_minters(
    provider: ChainProvider,
    router: OnChainEntity,
    *,
    token0: AddressLike,
    token1: AddressLike,
    slice_arg: SliceArg,
) -> Address | None:
    wallet0, wallet1 = await get_jetton_wallet_addresses(
        provider, (token0, router.address), (token1, router.address)
    )
    return await get_pool_address(
        provider, router, token0=wallet0, token1=wallet1, slice_arg=slice_arg
    )


async def get_lp_account_address(
    provider: ChainProvider,
    pool: OnChainEntity,
    *,
    owner_address: AddressLike,
    slice_arg: SliceArg,
) -> Address | None:
    stack = await pool.call_get_method(
        provider, "get_lp_account_address", [slice_arg(owner_address)]
    )
    return absent_to_none(stack.read_address_opt())


async def get_vault_address(
    provider: ChainProvider,
    router: OnChainEntity,
    *,
    user: AddressLike,
    token_wallet: AddressLike,
) -> Address:
    stack = await router.call_get_method(
        provider,
        "get_vault_address",
        [named_slice_arg(user), named_slice_arg(token_wallet)],
    )
    return stack.read_address()


async def get_vault_address_by_jetton_minter(
    provider: ChainProvider,
    router: OnChainEntity,
    *,
    user: AddressLike,
    token_minter: AddressLike,
) -> Address:
    token_wallet = await get_jetton_wallet_address(
        provider, token_minter, router.address
    )
    return await get_vault_address(
        provider, router, user=user, token_wallet=token_wallet
    )
