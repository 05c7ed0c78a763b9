from __future__ import annotations

import time
from typing import ClassVar

from pytoniq_core import Cell

from tondex_paths.core.config import get_tx_deadline
from tondex_paths.core.constants.stonfi import ROUTER_V1_ADDRESS, DexOpV2_1, DexType
from tondex_paths.core.errors import InvalidParameterError
from tondex_paths.core.utils.ton import AddressLike, same_address

from ..contract import GasOverrides
from ..gas import GasOperation
from ..revisions import DexRevision
from ..v2.router import RouterV2, build_provide_body, build_swap_body
from .pool import (
    CPIPoolV2_1,
    PoolV2_1,
    StablePoolV2_1,
    WCPIPoolV2_1,
    WStablePoolV2_1,
)
from .vault import VaultV2_1


class RouterV2_1(RouterV2):  # noqa: N801
    """v2.1 router.

    Payloads gain a 64-bit expiry timestamp after the excess address, and
    the custom payload handed to the pool is named ``dex_custom_payload``.
    Transactions and get methods are the same as v2.
    """

    revision = DexRevision.V2_1
    op_codes = DexOpV2_1
    dex_type: ClassVar[DexType | None] = None
    pool_class: ClassVar[type[PoolV2_1]] = PoolV2_1
    vault_class: ClassVar[type[VaultV2_1]] = VaultV2_1

    def __init__(
        self,
        address: AddressLike,
        *,
        gas_constants: GasOverrides = None,
        tx_deadline: int | None = None,
    ):
        super().__init__(address, gas_constants=gas_constants)
        if same_address(self.address, ROUTER_V1_ADDRESS):
            raise InvalidParameterError(
                "A v2.1 router cannot be created with the v1 router address; "
                "funds sent with v2.1 payloads to it would be lost"
            )
        self.tx_deadline = get_tx_deadline() if tx_deadline is None else tx_deadline

    def default_deadline(self) -> int:
        """Unix time ``tx_deadline`` seconds from now."""
        return int(time.time()) + self.tx_deadline

    def _deadline(self, deadline: int | None) -> int:
        return self.default_deadline() if deadline is None else deadline

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
        dex_custom_payload: Cell | None = None,
        dex_custom_payload_forward_gas_amount: int | None = None,
        refund_payload: Cell | None = None,
        refund_forward_gas_amount: int | None = None,
        deadline: int | None = None,
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
            custom_payload=dex_custom_payload,
            custom_payload_forward_gas_amount=dex_custom_payload_forward_gas_amount,
            refund_payload=refund_payload,
            refund_forward_gas_amount=refund_forward_gas_amount,
            deadline=self._deadline(deadline),
        )

    def create_cross_swap_body(
        self,
        *,
        ask_jetton_wallet_address: AddressLike,
        receiver_address: AddressLike,
        min_ask_amount: int,
        refund_address: AddressLike,
        excesses_address: AddressLike | None = None,
        referral_address: AddressLike | None = None,
        referral_value: int | None = None,
        dex_custom_payload: Cell | None = None,
        dex_custom_payload_forward_gas_amount: int | None = None,
        refund_payload: Cell | None = None,
        refund_forward_gas_amount: int | None = None,
        deadline: int | None = None,
    ) -> Cell:
        """Swap body for a hop routed on to another pool."""
        return build_swap_body(
            self.op_codes.CROSS_SWAP,
            ask_jetton_wallet_address=ask_jetton_wallet_address,
            receiver_address=receiver_address,
            min_ask_amount=min_ask_amount,
            refund_address=refund_address,
            excesses_address=excesses_address,
            referral_address=referral_address,
            referral_value=referral_value,
            custom_payload=dex_custom_payload,
            custom_payload_forward_gas_amount=dex_custom_payload_forward_gas_amount,
            refund_payload=refund_payload,
            refund_forward_gas_amount=refund_forward_gas_amount,
            deadline=self._deadline(deadline),
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
        dex_custom_payload: Cell | None = None,
        dex_custom_payload_forward_gas_amount: int | None = None,
        deadline: int | None = None,
    ) -> Cell:
        return build_provide_body(
            self.op_codes.PROVIDE_LP,
            router_wallet_address=router_wallet_address,
            receiver_address=receiver_address,
            min_lp_out=min_lp_out,
            refund_address=refund_address,
            excesses_address=excesses_address,
            both_positive=both_positive,
            custom_payload=dex_custom_payload,
            custom_payload_forward_gas_amount=dex_custom_payload_forward_gas_amount,
            deadline=self._deadline(deadline),
        )

    def create_cross_provide_liquidity_body(
        self,
        *,
        router_wallet_address: AddressLike,
        receiver_address: AddressLike,
        min_lp_out: int,
        refund_address: AddressLike,
        excesses_address: AddressLike | None = None,
        both_positive: bool = True,
        dex_custom_payload: Cell | None = None,
        dex_custom_payload_forward_gas_amount: int | None = None,
        deadline: int | None = None,
    ) -> Cell:
        return build_provide_body(
            self.op_codes.CROSS_PROVIDE_LP,
            router_wallet_address=router_wallet_address,
            receiver_address=receiver_address,
            min_lp_out=min_lp_out,
            refund_address=refund_address,
            excesses_address=excesses_address,
            both_positive=both_positive,
            custom_payload=dex_custom_payload,
            custom_payload_forward_gas_amount=dex_custom_payload_forward_gas_amount,
            deadline=self._deadline(deadline),
        )


class CPIRouterV2_1(RouterV2_1):  # noqa: N801
    dex_type = DexType.CPI
    pool_class = CPIPoolV2_1


class StableRouterV2_1(RouterV2_1):  # noqa: N801
    dex_type = DexType.STABLE
    pool_class = StablePoolV2_1


class WCPIRouterV2_1(RouterV2_1):  # noqa: N801
    """Weighted constant-product router; its swaps cost more gas."""

    dex_type = DexType.WCPI
    pool_class = WCPIPoolV2_1
    gas_defaults = {
        GasOperation.SWAP_JETTON_TO_JETTON: {
            "gas_amount": "0.319",
            "forward_gas_amount": "0.259",
        },
        GasOperation.SWAP_JETTON_TO_TON: {
            "gas_amount": "0.319",
            "forward_gas_amount": "0.259",
        },
        GasOperation.SWAP_TON_TO_JETTON: {"forward_gas_amount": "0.319"},
    }


class WStableRouterV2_1(RouterV2_1):  # noqa: N801
    """Weighted stableswap router; its swaps cost more gas."""

    dex_type = DexType.WSTABLE
    pool_class = WStablePoolV2_1
    gas_defaults = {
        GasOperation.SWAP_JETTON_TO_JETTON: {
            "gas_amount": "0.479",
            "forward_gas_amount": "0.419",
        },
        GasOperation.SWAP_JETTON_TO_TON: {
            "gas_amount": "0.479",
            "forward_gas_amount": "0.419",
        },
        GasOperation.SWAP_TON_TO_JETTON: {"forward_gas_amount": "0.479"},
    }
