from __future__ import annotations

from pytoniq_core import Address, Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import DexOpV1
from tondex_paths.core.utils.jetton import JettonMinter
from tondex_paths.core.utils.ton import AddressLike, positional_slice_arg, to_address
from tondex_paths.core.utils.units import to_coins

from .. import resolver
from ..contract import DexContract, query_id_or_default
from ..gas import GasOperation
from ..revisions import DexRevision
from ..types import ExpectedLiquidity, ExpectedOutputs, PoolDataV1
from .lp_account import LpAccountV1


class PoolV1(DexContract):
    """v1 pool; it is also the minter of its own LP jetton."""

    revision = DexRevision.V1
    role = "pool"

    def create_collect_fees_body(self, *, query_id: int | None = None) -> Cell:
        return (
            begin_cell()
            .store_uint(DexOpV1.COLLECT_FEES, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .end_cell()
        )

    async def get_collect_fee_tx_params(
        self, *, gas_amount: int | None = None, query_id: int | None = None
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.COLLECT_FEES, gas_amount=gas_amount
        )
        return TxParams(
            to=self.address,
            value=gas.require_gas_amount(),
            body=self.create_collect_fees_body(query_id=query_id),
        )

    def create_burn_body(
        self,
        *,
        amount: int,
        response_address: AddressLike,
        query_id: int | None = None,
    ) -> Cell:
        return (
            begin_cell()
            .store_uint(DexOpV1.REQUEST_BURN, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_coins(to_coins(amount))
            .store_address(to_address(response_address))
            .end_cell()
        )

    async def get_burn_tx_params(
        self,
        provider: ChainProvider,
        *,
        amount: int,
        response_address: AddressLike,
        gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        """Burn LP jettons from ``response_address``'s LP wallet."""
        gas = self.gas_constants.resolve(GasOperation.BURN, gas_amount=gas_amount)
        to = await self.get_jetton_wallet_address(
            provider, owner_address=response_address
        )
        body = self.create_burn_body(
            amount=amount, response_address=response_address, query_id=query_id
        )
        return TxParams(to=to, value=gas.require_gas_amount(), body=body)

    async def get_jetton_wallet_address(
        self, provider: ChainProvider, *, owner_address: AddressLike
    ) -> Address:
        return await JettonMinter(self.address).get_wallet_address(
            provider, owner_address
        )

    async def get_expected_outputs(
        self, provider: ChainProvider, *, amount: int, jetton_wallet: AddressLike
    ) -> ExpectedOutputs:
        """Simulate swapping ``amount`` sent from the router's ``jetton_wallet``."""
        stack = await self.call_get_method(
            provider,
            "get_expected_outputs",
            [("num", to_coins(amount)), positional_slice_arg(jetton_wallet)],
        )
        return ExpectedOutputs(
            jetton_to_receive=stack.read_int(),
            protocol_fee_paid=stack.read_int(),
            ref_fee_paid=stack.read_int(),
        )

    async def get_expected_tokens(
        self, provider: ChainProvider, *, amount0: int, amount1: int
    ) -> int:
        """LP tokens minted for depositing ``amount0`` and ``amount1``."""
        stack = await self.call_get_method(
            provider,
            "get_expected_tokens",
            [("num", to_coins(amount0)), ("num", to_coins(amount1))],
        )
        return stack.read_int()

    async def get_expected_liquidity(
        self, provider: ChainProvider, *, jetton_amount: int
    ) -> ExpectedLiquidity:
        """Both pool tokens returned for burning ``jetton_amount`` LP tokens."""
        stack = await self.call_get_method(
            provider, "get_expected_liquidity", [("num", to_coins(jetton_amount))]
        )
        return ExpectedLiquidity(amount0=stack.read_int(), amount1=stack.read_int())

    async def get_lp_account_address(
        self, provider: ChainProvider, *, owner_address: AddressLike
    ) -> Address | None:
        return await resolver.get_lp_account_address(
            provider, self, owner_address=owner_address, slice_arg=positional_slice_arg
        )

    async def get_lp_account(
        self, provider: ChainProvider, *, owner_address: AddressLike
    ) -> LpAccountV1 | None:
        lp_account_address = await self.get_lp_account_address(
            provider, owner_address=owner_address
        )
        if lp_account_address is None:
            return None
        return LpAccountV1(lp_account_address)

    async def get_pool_data(self, provider: ChainProvider) -> PoolDataV1:
        stack = await self.call_get_method(provider, "get_pool_data")
        return PoolDataV1(
            reserve0=stack.read_int(),
            reserve1=stack.read_int(),
            token0_wallet_address=stack.read_address(),
            token1_wallet_address=stack.read_address(),
            lp_fee=stack.read_int(),
            protocol_fee=stack.read_int(),
            ref_fee=stack.read_int(),
            protocol_fee_address=stack.read_address_opt(),
            collected_token0_protocol_fee=stack.read_int(),
            collected_token1_protocol_fee=stack.read_int(),
        )
