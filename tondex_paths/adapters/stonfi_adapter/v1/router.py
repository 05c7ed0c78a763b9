from __future__ import annotations

from pytoniq_core import Address, Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import ROUTER_V1_ADDRESS, DexOpV1
from tondex_paths.core.utils.ton import (
    AddressLike,
    is_hole_address,
    positional_slice_arg,
    to_address,
    to_optional_address,
)
from tondex_paths.core.utils.units import to_coins

from .. import resolver
from ..assembler import assemble_jetton_transfer, assemble_ton_transfer
from ..contract import (
    DexContract,
    GasOverrides,
    ensure_same_revision,
    query_id_or_default,
)
from ..gas import GasAmounts, GasOperation
from ..pton import Pton
from ..revisions import DexRevision
from ..types import RouterData
from .pool import PoolV1


class RouterV1(DexContract):
    """Router of the first DEX revision.

    Each jetton that goes through the DEX is held by the router; the router
    itself keeps no per-pair state. v1 payloads carry no query id, no refund or
    excess addresses and no deadline.
    """

    revision = DexRevision.V1
    role = "router"

    def __init__(
        self,
        address: AddressLike = ROUTER_V1_ADDRESS,
        *,
        gas_constants: GasOverrides = None,
    ):
        super().__init__(address, gas_constants=gas_constants)

    def create_swap_body(
        self,
        *,
        ask_jetton_wallet_address: AddressLike,
        min_ask_amount: int,
        user_wallet_address: AddressLike,
        referral_address: AddressLike | None = None,
    ) -> Cell:
        builder = (
            begin_cell()
            .store_uint(DexOpV1.SWAP, 32)
            .store_address(to_address(ask_jetton_wallet_address))
            .store_coins(to_coins(min_ask_amount))
            .store_address(to_address(user_wallet_address))
        )
        referral = to_optional_address(referral_address)
        if referral is not None and not is_hole_address(referral):
            builder.store_uint(1, 1).store_address(referral)
        else:
            builder.store_uint(0, 1)
        return builder.end_cell()

    def create_provide_liquidity_body(
        self, *, router_wallet_address: AddressLike, min_lp_out: int
    ) -> Cell:
        return (
            begin_cell()
            .store_uint(DexOpV1.PROVIDE_LP, 32)
            .store_address(to_address(router_wallet_address))
            .store_coins(to_coins(min_lp_out))
            .end_cell()
        )

    async def get_swap_jetton_to_jetton_tx_params(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        offer_jetton_address: AddressLike,
        ask_jetton_address: AddressLike,
        offer_amount: int,
        min_ask_amount: int,
        referral_address: AddressLike | None = None,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.SWAP_JETTON_TO_JETTON,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
        )
        return await self._swap_jetton(
            provider,
            user_wallet_address=user_wallet_address,
            offer_jetton_address=offer_jetton_address,
            ask_jetton_address=ask_jetton_address,
            offer_amount=offer_amount,
            min_ask_amount=min_ask_amount,
            referral_address=referral_address,
            gas=gas,
            query_id=query_id,
        )

    async def get_swap_jetton_to_ton_tx_params(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        offer_jetton_address: AddressLike,
        proxy_ton: Pton,
        offer_amount: int,
        min_ask_amount: int,
        referral_address: AddressLike | None = None,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        ensure_same_revision(self.revision, proxy_ton)
        gas = self.gas_constants.resolve(
            GasOperation.SWAP_JETTON_TO_TON,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
        )
        return await self._swap_jetton(
            provider,
            user_wallet_address=user_wallet_address,
            offer_jetton_address=offer_jetton_address,
            ask_jetton_address=proxy_ton.address,
            offer_amount=offer_amount,
            min_ask_amount=min_ask_amount,
            referral_address=referral_address,
            gas=gas,
            query_id=query_id,
        )

    async def _swap_jetton(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        offer_jetton_address: AddressLike,
        ask_jetton_address: AddressLike,
        offer_amount: int,
        min_ask_amount: int,
        referral_address: AddressLike | None,
        gas: GasAmounts,
        query_id: int | None,
    ) -> TxParams:
        def build_payload(ask_jetton_wallet: Address) -> Cell:
            return self.create_swap_body(
                ask_jetton_wallet_address=ask_jetton_wallet,
                min_ask_amount=min_ask_amount,
                user_wallet_address=user_wallet_address,
                referral_address=referral_address,
            )

        return await assemble_jetton_transfer(
            provider,
            router=self,
            user_wallet_address=user_wallet_address,
            offer_jetton_address=offer_jetton_address,
            router_jetton_address=ask_jetton_address,
            build_payload=build_payload,
            amount=offer_amount,
            gas=gas,
            query_id=query_id_or_default(query_id),
        )

    async def get_swap_ton_to_jetton_tx_params(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        proxy_ton: Pton,
        ask_jetton_address: AddressLike,
        offer_amount: int,
        min_ask_amount: int,
        referral_address: AddressLike | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        ensure_same_revision(self.revision, proxy_ton)
        gas = self.gas_constants.resolve(
            GasOperation.SWAP_TON_TO_JETTON, forward_gas_amount=forward_gas_amount
        )

        def build_payload(ask_jetton_wallet: Address) -> Cell:
            return self.create_swap_body(
                ask_jetton_wallet_address=ask_jetton_wallet,
                min_ask_amount=min_ask_amount,
                user_wallet_address=user_wallet_address,
                referral_address=referral_address,
            )

        return await assemble_ton_transfer(
            provider,
            router=self,
            proxy_ton=proxy_ton,
            user_wallet_address=user_wallet_address,
            router_jetton_address=ask_jetton_address,
            build_payload=build_payload,
            offer_amount=offer_amount,
            forward_gas_amount=gas.require_forward_gas_amount(),
            query_id=query_id_or_default(query_id),
        )

    async def get_provide_liquidity_jetton_tx_params(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        send_token_address: AddressLike,
        other_token_address: AddressLike,
        send_amount: int,
        min_lp_out: int,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.PROVIDE_LP_JETTON,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
        )

        def build_payload(router_wallet: Address) -> Cell:
            return self.create_provide_liquidity_body(
                router_wallet_address=router_wallet, min_lp_out=min_lp_out
            )

        return await assemble_jetton_transfer(
            provider,
            router=self,
            user_wallet_address=user_wallet_address,
            offer_jetton_address=send_token_address,
            router_jetton_address=other_token_address,
            build_payload=build_payload,
            amount=send_amount,
            gas=gas,
            query_id=query_id_or_default(query_id),
        )

    async def get_provide_liquidity_ton_tx_params(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        proxy_ton: Pton,
        other_token_address: AddressLike,
        send_amount: int,
        min_lp_out: int,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        ensure_same_revision(self.revision, proxy_ton)
        gas = self.gas_constants.resolve(
            GasOperation.PROVIDE_LP_TON, forward_gas_amount=forward_gas_amount
        )

        def build_payload(router_wallet: Address) -> Cell:
            return self.create_provide_liquidity_body(
                router_wallet_address=router_wallet, min_lp_out=min_lp_out
            )

        return await assemble_ton_transfer(
            provider,
            router=self,
            proxy_ton=proxy_ton,
            user_wallet_address=user_wallet_address,
            router_jetton_address=other_token_address,
            build_payload=build_payload,
            offer_amount=send_amount,
            forward_gas_amount=gas.require_forward_gas_amount(),
            query_id=query_id_or_default(query_id),
        )

    async def get_pool_address(
        self, provider: ChainProvider, *, token0: AddressLike, token1: AddressLike
    ) -> Address | None:
        """Pool for two router-owned jetton wallets; ``None`` if none is deployed."""
        return await resolver.get_pool_address(
            provider, self, token0=token0, token1=token1, slice_arg=positional_slice_arg
        )

    async def get_pool_address_by_jetton_minters(
        self, provider: ChainProvider, *, token0: AddressLike, token1: AddressLike
    ) -> Address | None:
        return await resolver.get_pool_address_by_jetton_minters(
            provider, self, token0=token0, token1=token1, slice_arg=positional_slice_arg
        )

    async def get_pool(
        self, provider: ChainProvider, *, token0: AddressLike, token1: AddressLike
    ) -> PoolV1 | None:
        pool_address = await self.get_pool_address_by_jetton_minters(
            provider, token0=token0, token1=token1
        )
        if pool_address is None:
            return None
        return PoolV1(pool_address)

    async def get_router_data(self, provider: ChainProvider) -> RouterData:
        stack = await self.call_get_method(provider, "get_router_data")
        return RouterData(
            is_locked=stack.read_boolean(),
            admin_address=stack.read_address(),
            temp_upgrade=stack.read_cell(),
            pool_code=stack.read_cell(),
            jetton_lp_wallet_code=stack.read_cell(),
            lp_account_code=stack.read_cell(),
        )
