from __future__ import annotations

from pytoniq_core import Cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.constants.stonfi import DexOpV2_1
from tondex_paths.core.utils.ton import AddressLike

from ..gas import GasOperation
from ..revisions import DexRevision
from ..v2.lp_account import LpAccountV2


class LpAccountV2_1(LpAccountV2):  # noqa: N801
    """Same wire format as v2; the direct-add payload is a DEX custom payload."""

    revision = DexRevision.V2_1
    op_codes = DexOpV2_1

    def create_direct_add_liquidity_body(
        self,
        *,
        user_wallet_address: AddressLike,
        amount0: int,
        amount1: int,
        minimum_lp_to_mint: int | None = None,
        dex_custom_payload: Cell | None = None,
        dex_custom_payload_forward_gas_amount: int | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        query_id: int | None = None,
    ) -> Cell:
        return self._direct_add_body(
            user_wallet_address=user_wallet_address,
            amount0=amount0,
            amount1=amount1,
            minimum_lp_to_mint=minimum_lp_to_mint,
            custom_payload=dex_custom_payload,
            custom_payload_forward_gas_amount=dex_custom_payload_forward_gas_amount,
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
        dex_custom_payload: Cell | None = None,
        dex_custom_payload_forward_gas_amount: int | None = None,
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
            dex_custom_payload=dex_custom_payload,
            dex_custom_payload_forward_gas_amount=dex_custom_payload_forward_gas_amount,
            refund_address=refund_address,
            excesses_address=excesses_address,
            query_id=query_id,
        )
        return TxParams(to=self.address, value=gas.require_gas_amount(), body=body)
