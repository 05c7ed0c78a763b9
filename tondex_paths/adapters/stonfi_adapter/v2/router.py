from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, ClassVar

from pytoniq_core import Address, Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import DexOpV2, DexOpV2_1
from tondex_paths.core.errors import InvalidParameterError
from tondex_paths.core.utils.ton import (
    AddressLike,
    named_slice_arg,
    to_address,
    to_optional_address,
)
from tondex_paths.core.utils.units import to_coins

from .. import resolver
from ..assembler import assemble_jetton_transfer, assemble_ton_transfer
from ..contract import (
    DexContract,
    checked_referral_value,
    ensure_same_revision,
    query_id_or_default,
)
from ..gas import DepositMode, GasOperation
from ..pton import Pton
from ..revisions import DexRevision
from ..types import RouterData, RouterVersion, parse_dex_type
from .pool import PoolV2
from .vault import VaultV2


def build_swap_body(
    op: int,
    *,
    ask_jetton_wallet_address: AddressLike,
    receiver_address: AddressLike,
    min_ask_amount: int,
    refund_address: AddressLike,
    excesses_address: AddressLike | None = None,
    referral_address: AddressLike | None = None,
    referral_value: int | None = None,
    custom_payload: Cell | None = None,
    custom_payload_forward_gas_amount: int | None = None,
    refund_payload: Cell | None = None,
    refund_forward_gas_amount: int | None = None,
    deadline: int | None = None,
) -> Cell:
    """Swap payload shared by v2 and v2.1.

    ``deadline`` (uint64 after the excess address) is written only when given;
    v2 bodies have none.
    """
    referral = checked_referral_value(referral_value)
    extension = (
        begin_cell()
        .store_coins(to_coins(min_ask_amount))
        .store_address(to_address(receiver_address))
        .store_coins(to_coins(custom_payload_forward_gas_amount or 0))
        .store_maybe_ref(custom_payload)
        .store_coins(to_coins(refund_forward_gas_amount or 0))
        .store_maybe_ref(refund_payload)
        .store_uint(referral, 16)
        .store_address(to_optional_address(referral_address))
        .end_cell()
    )
    builder = (
        begin_cell()
        .store_uint(op, 32)
        .store_address(to_address(ask_jetton_wallet_address))
        .store_address(to_address(refund_address))
        .store_address(to_address(excesses_address or refund_address))
    )
    if deadline is not None:
        builder = builder.store_uint(deadline, 64)
    return builder.store_ref(extension).end_cell()


def build_provide_body(
    op: int,
    *,
    router_wallet_address: AddressLike,
    receiver_address: AddressLike,
    min_lp_out: int,
    refund_address: AddressLike,
    excesses_address: AddressLike | None = None,
    both_positive: bool = True,
    custom_payload: Cell | None = None,
    custom_payload_forward_gas_amount: int | None = None,
    deadline: int | None = None,
) -> Cell:
    extension = (
        begin_cell()
        .store_coins(to_coins(min_lp_out))
        .store_address(to_address(receiver_address))
        .store_uint(1 if both_positive else 0, 1)
        .store_coins(to_coins(custom_payload_forward_gas_amount or 0))
        .store_maybe_ref(custom_payload)
        .end_cell()
    )
    builder = (
        begin_cell()
        .store_uint(op, 32)
        .store_address(to_address(router_wallet_address))
        .store_address(to_address(refund_address))
        .store_address(to_address(excesses_address or refund_address))
    )
    if deadline is not None:
        builder = builder.store_uint(deadline, 64)
    return builder.store_ref(extension).end_cell()


def checked_payload_options(
    builder: Callable[..., Cell], options: dict[str, Any]
) -> dict[str, Any]:
    """Refuse keywords ``builder`` does not take, before any lookup goes out."""
    accepted = inspect.signature(builder).parameters
    unknown = sorted(set(options) - set(accepted))
    if unknown:
        raise InvalidParameterError(
            f"{builder.__name__}() does not accept {', '.join(unknown)}"
        )
    return options


class RouterV2(DexContract):
    """v2 router: refund/excess addresses, an extension ref and referral fees.

    Referral fees accrue in per-user vaults instead of being paid out per swap.
    The tx methods are shared with later revisions; keywords they do not name
    (``custom_payload`` here, ``dex_custom_payload`` and ``deadline`` in v2.1)
    are handed to the revision's body builder.
    """

    revision = DexRevision.V2
    role = "router"
    op_codes: ClassVar[type[DexOpV2] | type[DexOpV2_1]] = DexOpV2
    pool_class: ClassVar[type[PoolV2]] = PoolV2
    vault_class: ClassVar[type[VaultV2]] = VaultV2

    def create_swap_body(
        self,
        *,
        ask_jetton_wallet_address: AddressLike,
        receiver_address: AddressLike,
        min_ask_amount: int,
        refund_address: AddressLike,
        excesses_address: AddressLike | None = None,
        referral_address: AddressLike | None = None,
        referral_value: int | None = None,
        custom_payload: Cell | None = None,
        custom_payload_forward_gas_amount: int | None = None,
        refund_payload: Cell | None = None,
        refund_forward_gas_amount: int | None = None,
    ) -> Cell:
        return build_swap_body(
            self.op_codes.SWAP,
            ask_jetton_wallet_address=ask_jetton_wallet_address,
            receiver_address=receiver_address,
            min_ask_amount=min_ask_amount,
            refund_address=refund_address,
            excesses_address=excesses_address,
            referral_address=referral_address,
            referral_value=referral_value,
            custom_payload=custom_payload,
            custom_payload_forward_gas_amount=custom_payload_forward_gas_amount,
            refund_payload=refund_payload,
            refund_forward_gas_amount=refund_forward_gas_amount,
        )

    def create_provide_liquidity_body(
        self,
        *,
        router_wallet_address: AddressLike,
        receiver_address: AddressLike,
        min_lp_out: int,
        refund_address: AddressLike,
        excesses_address: AddressLike | None = None,
        both_positive: bool = True,
        custom_payload: Cell | None = None,
        custom_payload_forward_gas_amount: int | None = None,
    ) -> Cell:
        return build_provide_body(
            self.op_codes.PROVIDE_LP,
            router_wallet_address=router_wallet_address,
            receiver_address=receiver_address,
            min_lp_out=min_lp_out,
            refund_address=refund_address,
            excesses_address=excesses_address,
            both_positive=both_positive,
            custom_payload=custom_payload,
            custom_payload_forward_gas_amount=custom_payload_forward_gas_amount,
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
        receiver_address: AddressLike | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        referral_address: AddressLike | None = None,
        referral_value: int | None = None,
        refund_payload: Cell | None = None,
        refund_forward_gas_amount: int | None = None,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
        jetton_custom_payload: Cell | None = None,
        **payload_options: Any,
    ) -> TxParams:
        return await self._swap_jetton(
            provider,
            GasOperation.SWAP_JETTON_TO_JETTON,
            user_wallet_address=user_wallet_address,
            offer_jetton_address=offer_jetton_address,
            ask_jetton_address=ask_jetton_address,
            offer_amount=offer_amount,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
            query_id=query_id,
            jetton_custom_payload=jetton_custom_payload,
            swap_fields=dict(
                min_ask_amount=min_ask_amount,
                receiver_address=receiver_address,
                refund_address=refund_address,
                excesses_address=excesses_address,
                referral_address=referral_address,
                referral_value=referral_value,
                refund_payload=refund_payload,
                refund_forward_gas_amount=refund_forward_gas_amount,
                **payload_options,
            ),
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
        receiver_address: AddressLike | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        referral_address: AddressLike | None = None,
        referral_value: int | None = None,
        refund_payload: Cell | None = None,
        refund_forward_gas_amount: int | None = None,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
        jetton_custom_payload: Cell | None = None,
        **payload_options: Any,
    ) -> TxParams:
        ensure_same_revision(self.revision, proxy_ton)
        return await self._swap_jetton(
            provider,
            GasOperation.SWAP_JETTON_TO_TON,
            user_wallet_address=user_wallet_address,
            offer_jetton_address=offer_jetton_address,
            ask_jetton_address=proxy_ton.address,
            offer_amount=offer_amount,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
            query_id=query_id,
            jetton_custom_payload=jetton_custom_payload,
            swap_fields=dict(
                min_ask_amount=min_ask_amount,
                receiver_address=receiver_address,
                refund_address=refund_address,
                excesses_address=excesses_address,
                referral_address=referral_address,
                referral_value=referral_value,
                refund_payload=refund_payload,
                refund_forward_gas_amount=refund_forward_gas_amount,
                **payload_options,
            ),
        )

    def _swap_payload_builder(
        self, user_wallet_address: AddressLike, swap_fields: dict[str, Any]
    ) -> Callable[[Address], Cell]:
        # validate before any lookup goes out
        checked_referral_value(swap_fields.get("referral_value"))
        fields = checked_payload_options(self.create_swap_body, dict(swap_fields))
        fields["receiver_address"] = fields["receiver_address"] or user_wallet_address
        fields["refund_address"] = fields["refund_address"] or user_wallet_address

        def build_payload(ask_jetton_wallet: Address) -> Cell:
            return self.create_swap_body(
                ask_jetton_wallet_address=ask_jetton_wallet, **fields
            )

        return build_payload

    async def _swap_jetton(
        self,
        provider: ChainProvider,
        operation: GasOperation,
        *,
        user_wallet_address: AddressLike,
        offer_jetton_address: AddressLike,
        ask_jetton_address: AddressLike,
        offer_amount: int,
        gas_amount: int | None,
        forward_gas_amount: int | None,
        query_id: int | None,
        jetton_custom_payload: Cell | None,
        swap_fields: dict[str, Any],
    ) -> TxParams:
        build_payload = self._swap_payload_builder(user_wallet_address, swap_fields)
        gas = self.gas_constants.resolve(
            operation, gas_amount=gas_amount, forward_gas_amount=forward_gas_amount
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
            jetton_custom_payload=jetton_custom_payload,
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
        receiver_address: AddressLike | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        referral_address: AddressLike | None = None,
        referral_value: int | None = None,
        refund_payload: Cell | None = None,
        refund_forward_gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
        **payload_options: Any,
    ) -> TxParams:
        ensure_same_revision(self.revision, proxy_ton)
        build_payload = self._swap_payload_builder(
            user_wallet_address,
            dict(
                min_ask_amount=min_ask_amount,
                receiver_address=receiver_address,
                refund_address=refund_address,
                excesses_address=excesses_address,
                referral_address=referral_address,
                referral_value=referral_value,
                refund_payload=refund_payload,
                refund_forward_gas_amount=refund_forward_gas_amount,
                **payload_options,
            ),
        )
        gas = self.gas_constants.resolve(
            GasOperation.SWAP_TON_TO_JETTON, forward_gas_amount=forward_gas_amount
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
        receiver_address: AddressLike | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
        jetton_custom_payload: Cell | None = None,
        **payload_options: Any,
    ) -> TxParams:
        return await self._provide_jetton(
            provider,
            DepositMode.BOTH_SIDES,
            user_wallet_address=user_wallet_address,
            send_token_address=send_token_address,
            other_token_address=other_token_address,
            send_amount=send_amount,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
            query_id=query_id,
            jetton_custom_payload=jetton_custom_payload,
            provide_fields=dict(
                min_lp_out=min_lp_out,
                receiver_address=receiver_address,
                refund_address=refund_address,
                excesses_address=excesses_address,
                **payload_options,
            ),
        )

    async def get_single_side_provide_liquidity_jetton_tx_params(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        send_token_address: AddressLike,
        other_token_address: AddressLike,
        send_amount: int,
        min_lp_out: int,
        receiver_address: AddressLike | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
        jetton_custom_payload: Cell | None = None,
        **payload_options: Any,
    ) -> TxParams:
        return await self._provide_jetton(
            provider,
            DepositMode.SINGLE_SIDE,
            user_wallet_address=user_wallet_address,
            send_token_address=send_token_address,
            other_token_address=other_token_address,
            send_amount=send_amount,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
            query_id=query_id,
            jetton_custom_payload=jetton_custom_payload,
            provide_fields=dict(
                min_lp_out=min_lp_out,
                receiver_address=receiver_address,
                refund_address=refund_address,
                excesses_address=excesses_address,
                **payload_options,
            ),
        )

    def _provide_payload_builder(
        self,
        mode: DepositMode,
        user_wallet_address: AddressLike,
        provide_fields: dict[str, Any],
    ) -> Callable[[Address], Cell]:
        fields = checked_payload_options(
            self.create_provide_liquidity_body, dict(provide_fields)
        )
        fields["receiver_address"] = fields["receiver_address"] or user_wallet_address
        fields["refund_address"] = fields["refund_address"] or user_wallet_address
        fields["both_positive"] = mode is DepositMode.BOTH_SIDES

        def build_payload(router_wallet: Address) -> Cell:
            return self.create_provide_liquidity_body(
                router_wallet_address=router_wallet, **fields
            )

        return build_payload

    async def _provide_jetton(
        self,
        provider: ChainProvider,
        mode: DepositMode,
        *,
        user_wallet_address: AddressLike,
        send_token_address: AddressLike,
        other_token_address: AddressLike,
        send_amount: int,
        gas_amount: int | None,
        forward_gas_amount: int | None,
        query_id: int | None,
        jetton_custom_payload: Cell | None,
        provide_fields: dict[str, Any],
    ) -> TxParams:
        build_payload = self._provide_payload_builder(
            mode, user_wallet_address, provide_fields
        )
        gas = self.gas_constants.resolve(
            GasOperation.PROVIDE_LP_JETTON,
            mode,
            gas_amount=gas_amount,
            forward_gas_amount=forward_gas_amount,
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
            jetton_custom_payload=jetton_custom_payload,
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
        receiver_address: AddressLike | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
        **payload_options: Any,
    ) -> TxParams:
        return await self._provide_ton(
            provider,
            DepositMode.BOTH_SIDES,
            user_wallet_address=user_wallet_address,
            proxy_ton=proxy_ton,
            other_token_address=other_token_address,
            send_amount=send_amount,
            forward_gas_amount=forward_gas_amount,
            query_id=query_id,
            provide_fields=dict(
                min_lp_out=min_lp_out,
                receiver_address=receiver_address,
                refund_address=refund_address,
                excesses_address=excesses_address,
                **payload_options,
            ),
        )

    async def get_single_side_provide_liquidity_ton_tx_params(
        self,
        provider: ChainProvider,
        *,
        user_wallet_address: AddressLike,
        proxy_ton: Pton,
        other_token_address: AddressLike,
        send_amount: int,
        min_lp_out: int,
        receiver_address: AddressLike | None = None,
        refund_address: AddressLike | None = None,
        excesses_address: AddressLike | None = None,
        forward_gas_amount: int | None = None,
        query_id: int | None = None,
        **payload_options: Any,
    ) -> TxParams:
        return await self._provide_ton(
            provider,
            DepositMode.SINGLE_SIDE,
            user_wallet_address=user_wallet_address,
            proxy_ton=proxy_ton,
            other_token_address=other_token_address,
            send_amount=send_amount,
            forward_gas_amount=forward_gas_amount,
            query_id=query_id,
            provide_fields=dict(
                min_lp_out=min_lp_out,
                receiver_address=receiver_address,
                refund_address=refund_address,
                excesses_address=excesses_address,
                **payload_options,
            ),
        )

    async def _provide_ton(
        self,
        provider: ChainProvider,
        mode: DepositMode,
        *,
        user_wallet_address: AddressLike,
        proxy_ton: Pton,
        other_token_address: AddressLike,
        send_amount: int,
        forward_gas_amount: int | None,
        query_id: int | None,
        provide_fields: dict[str, Any],
    ) -> TxParams:
        ensure_same_revision(self.revision, proxy_ton)
        build_payload = self._provide_payload_builder(
            mode, user_wallet_address, provide_fields
        )
        gas = self.gas_constants.resolve(
            GasOperation.PROVIDE_LP_TON, mode, forward_gas_amount=forward_gas_amount
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
        return await resolver.get_pool_address(
            provider, self, token0=token0, token1=token1, slice_arg=named_slice_arg
        )

    async def get_pool_address_by_jetton_minters(
        self, provider: ChainProvider, *, token0: AddressLike, token1: AddressLike
    ) -> Address | None:
        return await resolver.get_pool_address_by_jetton_minters(
            provider, self, token0=token0, token1=token1, slice_arg=named_slice_arg
        )

    async def get_pool(
        self, provider: ChainProvider, *, token0: AddressLike, token1: AddressLike
    ) -> PoolV2 | None:
        pool_address = await self.get_pool_address_by_jetton_minters(
            provider, token0=token0, token1=token1
        )
        if pool_address is None:
            return None
        return self.pool_class(pool_address)

    async def get_vault_address(
        self, provider: ChainProvider, *, user: AddressLike, token_wallet: AddressLike
    ) -> Address:
        return await resolver.get_vault_address(
            provider, self, user=user, token_wallet=token_wallet
        )

    async def get_vault(
        self, provider: ChainProvider, *, user: AddressLike, token_minter: AddressLike
    ) -> VaultV2:
        vault_address = await resolver.get_vault_address_by_jetton_minter(
            provider, self, user=user, token_minter=token_minter
        )
        return self.vault_class(vault_address)

    async def get_router_version(self, provider: ChainProvider) -> RouterVersion:
        stack = await self.call_get_method(provider, "get_router_version")
        return RouterVersion(
            major=stack.read_int(),
            minor=stack.read_int(),
            development=stack.read_string(),
        )

    async def get_router_data(self, provider: ChainProvider) -> RouterData:
        stack = await self.call_get_method(provider, "get_router_data")
        return RouterData(
            router_id=stack.read_int(),
            dex_type=parse_dex_type(stack.read_string()),
            is_locked=stack.read_boolean(),
            admin_address=stack.read_address(),
            temp_upgrade=stack.read_cell(),
            pool_code=stack.read_cell(),
            jetton_lp_wallet_code=stack.read_cell(),
            lp_account_code=stack.read_cell(),
            vault_code=stack.read_cell(),
        )
