from __future__ import annotations

from typing import ClassVar

from pytoniq_core import Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import DexOpV2, DexOpV2_1
from tondex_paths.core.utils.ton import AddressLike, to_address
from tondex_paths.core.utils.units import to_coins

from ..contract import DexContract, query_id_or_default
from ..gas import GasOperation
from ..revisions import DexRevision
from ..types import LpAccountData


class LpAccountV2(DexContract):
    """v2 LP account.

    Refunds may carry payloads for each side, and a direct add names the
    receiver of the minted LP tokens plus its own refund and excess addresses.
    """

    revision = DexRevision.V2
    role = "lp_account"
    op_codes: ClassVar[type[DexOpV2] | type[DexOpV2_1]] = DexOpV2

    def create_refund_body(
        self,
        *,
        left_maybe_payload: Cell | None = None,
        right_maybe_payload: Cell | None = None,
        query_id: int | None = None,
    ) -> Cell:
        return (
            begin_cell()
            .store_uint(self.op_codes.REFUND_ME, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_maybe_ref(left_maybe_payload)
            .store_maybe_ref(right_maybe_payload)
            .end_cell()
        )

    async def get_refund_tx_params(
        self,
        *,
        left_maybe_payload: Cell | None = None,
        right_maybe_payload: Cell | None = None,
        gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        gas = self.gas_constants.resolve(GasOperation.REFUND, gas_amount=gas_amount)
        body = self.create_refund_body(
            left_maybe_payload=left_maybe_payload,
            right_maybe_payload=right_maybe_payload,
            query_id=query_id,
        )
        return TxParams(to=self.address, value=gas.require_gas_amount(), body=body)

    def _direct_add_body(
        self,
        *,
        user_wallet_address: AddressLike,
        amount0: int,
        amount1: int,
        minimum_lp_to_mint: int | None,
        custom_payload: Cell | None,
        custom_payload_forward_gas_amount: int | None,
        refund_address: AddressLike | None,
        excesses_address: AddressLike | None,
        query_id: int | None,
    ) -> Cell:
        refund = refund_address or user_wallet_address
        addresses = (
            begin_cell()
            .store_address(to_address(refund))
            .store_address(to_address(excesses_address or refund))
            .end_cell()
        )
        return (
            begin_cell()
            .store_uint(self.op_codes.DIRECT_ADD_LIQUIDITY, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_coins(to_coins(amount0))
            .store_coins(to_coins(amount1))
            .store_coins(
                to_coins(1 if minimum_lp_to_mint is None else minimum_lp_to_mint)
            )
            .store_coins(to_coins(custom_payload_forward_gas_amount or 0))
            .store_address(to_address(user_wallet_address))
            .store_maybe_ref(custom_payload)
            .store_ref(addresses)
            .end_cell()
        )

    def create_direct_add_liquidity_body(
        self,
        *,
        user_wallet_address: AddressLike,
        amount0: int,
        amount1: int,
        minimum_lp_to_mint: int | None = None,
        custom_payload: Cell | None = None,
        custom_payload_forward_gas_amount: int | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        query_id: int | None = None,
    ) -> Cell:
        return self._direct_add_body(
            user_wallet_address=user_wallet_address,
            amount0=amount0,
            amount1=amount1,
            minimum_lp_to_mint=minimum_lp_to_mint,
            custom_payload=custom_payload,
            custom_payload_forward_gas_amount=custom_payload_forward_gas_amount,
            refund_address=refund_address,
            excesses_address=excesses_address,
            query_id=query_id,
        )

    async def get_direct_add_liquidity_tx_params(
        self,
        *,
        user_wallet_address: AddressLike,
        amount0: int,
        amount1: int,
        minimum_lp_to_mint: int | None = None,
        custom_payload: Cell | None = None,
        custom_payload_forward_gas_amount: int | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.DIRECT_ADD_LP, gas_amount=gas_amount
        )
        body = self.create_direct_add_liquidity_body(
            user_wallet_address=user_wallet_address,
            amount0=amount0,
            amount1=amount1,
            minimum_lp_to_mint=minimum_lp_to_mint,
            custom_payload=custom_payload,
            custom_payload_forward_gas_amount=custom_payload_forward_gas_amount,
            refund_address=refund_address,
            excesses_address=excesses_address,
            query_id=query_id,
        )
        return TxParams(to=self.address, value=gas.require_gas_amount(), body=body)

    def create_reset_gas_body(self, *, query_id: int | None = None) -> Cell:
        return (
            begin_cell()
            .store_uint(self.op_codes.RESET_GAS, 32)
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
