from __future__ import annotations

from typing import ClassVar

from pytoniq_core import Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import DexOpV2, DexOpV2_1

from ..contract import DexContract, query_id_or_default
from ..gas import GasOperation
from ..revisions import DexRevision
from ..types import VaultData


class VaultV2(DexContract):
    """Per-user, per-token vault where v2 referral fees accumulate."""

    revision = DexRevision.V2
    role = "vault"
    op_codes: ClassVar[type[DexOpV2] | type[DexOpV2_1]] = DexOpV2

    def create_withdraw_fee_body(self, *, query_id: int | None = None) -> Cell:
        return (
            begin_cell()
            .store_uint(self.op_codes.WITHDRAW_FEE, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .end_cell()
        )

    async def get_withdraw_fee_tx_params(
        self, *, gas_amount: int | None = None, query_id: int | None = None
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.WITHDRAW_FEE, gas_amount=gas_amount
        )
        return TxParams(
            to=self.address,
            value=gas.require_gas_amount(),
            body=self.create_withdraw_fee_body(query_id=query_id),
        )

    async def get_vault_data(self, provider: ChainProvider) -> VaultData:
        stack = await self.call_get_method(provider, "get_vault_data")
        return VaultData(
            owner_address=stack.read_address(),
            token_address=stack.read_address(),
            router_address=stack.read_address(),
            deposited_amount=stack.read_int(),
        )
