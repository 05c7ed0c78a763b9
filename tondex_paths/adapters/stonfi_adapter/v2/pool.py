from __future__ import annotations

from typing import Any, ClassVar

from pytoniq_core import Address, Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import DexOpV2, DexOpV2_1, DexType
from tondex_paths.core.utils.jetton import JettonMinter
from tondex_paths.core.utils.ton import AddressLike, StackReader, named_slice_arg
from tondex_paths.core.utils.units import to_coins

from .. import resolver
from ..contract import DexContract, query_id_or_default
from ..gas import GasOperation
from ..revisions import DexRevision
from ..types import PoolDataV2, parse_dex_type
from .lp_account import LpAccountV2


class PoolV2(DexContract):
    revision = DexRevision.V2
    role = "pool"
    op_codes: ClassVar[type[DexOpV2] | type[DexOpV2_1]] = DexOpV2
    lp_account_class: ClassVar[type[LpAccountV2]] = LpAccountV2
    pool_data_class: ClassVar[type[PoolDataV2]] = PoolDataV2

    def create_collect_fees_body(self, *, query_id: int | None = None) -> Cell:
        return (
            begin_cell()
            .store_uint(self.op_codes.COLLECT_FEES, 32)
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
        custom_payload: Cell | None = None,
        query_id: int | None = None,
    ) -> Cell:
        # the response address stays empty; LP wallets answer to their owner
        return (
            begin_cell()
            .store_uint(self.op_codes.BURN, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_coins(to_coins(amount))
            .store_address(None)
            .store_maybe_ref(custom_payload)
            .end_cell()
        )

    async def get_burn_tx_params(
        self,
        provider: ChainProvider,
        *,
        amount: int,
        user_wallet_address: AddressLike,
        gas_amount: int | None = None,
        query_id: int | None = None,
        **payload_options: Any,
    ) -> TxParams:
        """Burn LP tokens through the owner's LP wallet.

        ``payload_options`` go to ``create_burn_body`` (``custom_payload`` here,
        ``dex_custom_payload`` in v2.1).
        """
        body = self.create_burn_body(
            amount=amount, query_id=query_id, **payload_options
        )
        gas = self.gas_constants.resolve(GasOperation.BURN, gas_amount=gas_amount)
        to = await self.get_jetton_wallet_address(
            provider, owner_address=user_wallet_address
        )
        return TxParams(to=to, value=gas.require_gas_amount(), body=body)

    async def get_jetton_wallet_address(
        self, provider: ChainProvider, *, owner_address: AddressLike
    ) -> Address:
        return await JettonMinter(self.address).get_wallet_address(
            provider, owner_address
        )

    async def get_pool_type(self, provider: ChainProvider) -> DexType | str:
        stack = await self.call_get_method(provider, "get_pool_type")
        return parse_dex_type(stack.read_string())

    async def get_lp_account_address(
        self, provider: ChainProvider, *, owner_address: AddressLike
    ) -> Address | None:
        return await resolver.get_lp_account_address(
            provider, self, owner_address=owner_address, slice_arg=named_slice_arg
        )

    async def get_lp_account(
        self, provider: ChainProvider, *, owner_address: AddressLike
    ) -> LpAccountV2 | None:
        lp_account_address = await self.get_lp_account_address(
            provider, owner_address=owner_address
        )
        if lp_account_address is None:
            return None
        return self.lp_account_class(lp_account_address)

    async def get_pool_data(self, provider: ChainProvider) -> PoolDataV2:
        stack = await self.call_get_method(provider, "get_pool_data")
        return self.pool_data_class(**self.read_pool_data(stack))

    def read_pool_data(self, stack: StackReader) -> dict[str, Any]:
        """Fields common to every v2+ curve; curve pools read their extras after."""
        return dict(
            is_locked=stack.read_boolean(),
            router_address=stack.read_address(),
            total_supply_lp=stack.read_int(),
            reserve0=stack.read_int(),
            reserve1=stack.read_int(),
            token0_wallet_address=stack.read_address(),
            token1_wallet_address=stack.read_address(),
            lp_fee=stack.read_int(),
            protocol_fee=stack.read_int(),
            protocol_fee_address=stack.read_address_opt(),
            collected_token0_protocol_fee=stack.read_int(),
            collected_token1_protocol_fee=stack.read_int(),
        )
