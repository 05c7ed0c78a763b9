from __future__ import annotations

from pytoniq_core import Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import DexOpV1
from tondex_paths.core.utils.units import to_coins

from ..contract import DexContract, query_id_or_default
from ..gas import GasOperation
from ..revisions import DexRevision
from ..types import LpAccountData


class LpAccountV1(DexContract):
    """Holds a user's not-yet-paired deposits for one pool."""

    revision = DexRevision.V1
    role = "lp_account"

    def create_refund_body(self, *, query_id: int | None = None) -> Cell:
        return (
            begin_cell()
            .store_uint(DexOpV1.REFUND, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .end_cell()
        )

    async def get_refund_tx_params(
        self, *, gas_amount: int | None = None, query_id: int | None = None
    ) -> TxParams:
        gas = self.gas_constants.resolve(GasOperation.REFUND, gas_amount=gas_amount)
        return TxParams(
            to=self.address,
            value=gas.require_gas_amount(),
            body=self.create_refund_body(query_id=query_id),
        )

    def create_direct_add_liquidity_body(
        self,
        *,
        amount0: int,
        amount1: int,
        minimum_lp_to_mint: int | None = None,
        query_id: int | None = None,
    ) -> Cell:
        return (
            begin_cell()
            .store_uint(DexOpV1.DIRECT_ADD_LIQUIDITY, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_coins(to_coins(amount0))
            .store_coins(to_coins(amount1))
            .store_coins(
                to_coins(1 if minimum_lp_to_mint is None else minimum_lp_to_mint)
            )
            .end_cell()
        )

    async def get_direct_add_liquidity_tx_params(
        self,
        *,
        amount0: int,
        amount1: int,
        minimum_lp_to_mint: int | None = None,
        gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.DIRECT_ADD_LP, gas_amount=gas_amount
        )
        body = self.create_direct_add_liquidity_body(
            amount0=amount0,
            amount1=amount1,
            minimum_lp_to_mint=minimum_lp_to_mint,
            query_id=query_id,
        )
        return TxParams(to=self.address, value=gas.require_gas_amount(), body=body)

    def create_reset_gas_body(self, *, query_id: int | None = None) -> Cell:
        return (
            begin_cell()
            .store_uint(DexOpV1.RESET_GAS, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .end_cell()
        )

    async def get_reset_gas_tx_params(
        self, *, gas_amount: int | None = None, query_id: int | None = None
    ) -> TxParams:
        gas = self.gas_constants.resolve(GasOperation.RESET_GAS, gas_amount=gas_amount)
        return TxParams(
            to=self.address,
            value=gas.require_gas_amount(),
            body=self.create_reset_gas_body(query_id=query_id),
        )

    async def get_lp_account_data(self, provider: ChainProvider) -> LpAccountData:
        stack = await self.call_get_method(provider, "get_lp_account_data")
        return LpAccountData(
            user_address=stack.read_address(),
            pool_address=stack.read_address(),
            amount0=stack.read_int(),
            amount1=stack.read_int(),
        )
