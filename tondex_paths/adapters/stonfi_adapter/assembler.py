"""Turns an operation into the ``TxParams`` a wallet signs.

Wallet lookups run first and concurrently; the router-side wallet is then
written into the revision's payload, which either rides inside a jetton
transfer (jetton offered) or a proxy TON transfer (TON offered).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

from pytoniq_core import Address, Cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.utils.contract import OnChainEntity
from tondex_paths.core.utils.jetton import create_jetton_transfer_message
from tondex_paths.core.utils.ton import AddressLike

from .gas import GasAmounts
from .pton import Pton
from .resolver import get_jetton_wallet_addresses

PayloadBuilder: TypeAlias = Callable[[Address], Cell]


async def assemble_jetton_transfer(
    provider: ChainProvider,
    *,
    router: OnChainEntity,
    user_wallet_address: AddressLike,
    offer_jetton_address: AddressLike,
    router_jetton_address: AddressLike,
    build_payload: PayloadBuilder,
    amount: int,
    gas: GasAmounts,
    query_id: int,
    jetton_custom_payload: Cell | None = None,
) -> TxParams:
    """Send ``amount`` of the offered jetton to the router with ``build_payload`` attached.

    ``build_payload`` receives the router's wallet for ``router_jetton_address``
    (the asked jetton for swaps, the paired jetton for liquidity).
    """
    offer_wallet, router_wallet = await get_jetton_wallet_addresses(
        provider,
        (offer_jetton_address, user_wallet_address),
        (router_jetton_address, router.address),
    )
    body = create_jetton_transfer_message(
        query_id=query_id,
        amount=amount,
        destination=router.address,
        response_destination=user_wallet_address,
        custom_payload=jetton_custom_payload,
        forward_ton_amount=gas.require_forward_gas_amount(),
        forward_payload=build_payload(router_wallet),
    )
    tx = TxParams(to=offer_wallet, value=gas.require_gas_amount(), body=body)
    router.logger.debug(f"jetton transfer via {offer_wallet.to_str()} value={tx.value}")
    return tx


async def assemble_ton_transfer(
    provider: ChainProvider,
    *,
    router: OnChainEntity,
    proxy_ton: Pton,
    user_wallet_address: AddressLike,
    router_jetton_address: AddressLike,
    build_payload: PayloadBuilder,
    offer_amount: int,
    forward_gas_amount: int,
    query_id: int,
) -> TxParams:
    """Offer native TON through the proxy; value is additive over the offer."""
    router_wallet, proxy_wallet = await get_jetton_wallet_addresses(
        provider,
        (router_jetton_address, router.address),
        (proxy_ton.address, router.address),
    )
    tx = await proxy_ton.get_ton_transfer_tx_params(
        provider,
        ton_amount=offer_amount,
        destination_address=router.address,
        destination_wallet_address=proxy_wallet,
        refund_address=user_wallet_address,
        forward_payload=build_payload(router_wallet),
        forward_ton_amount=forward_gas_amount,
        query_id=query_id,
    )
    router.logger.debug(f"ton transfer via {proxy_wallet.to_str()} value={tx.value}")
    return tx
