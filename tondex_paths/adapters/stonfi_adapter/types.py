"""Types for StonfiAdapter (dataclasses)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pytoniq_core import Address, Cell

from tondex_paths.core.constants.stonfi import DexType


def parse_dex_type(value: str) -> DexType | str:
    """Known pool curves become ``DexType``; anything newer is kept as reported."""
    try:
        return DexType(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class RouterVersion:
    major: int
    minor: int
    development: str


@dataclass(frozen=True)
class RouterData:
    """Router state from ``get_router_data``.

    v1 routers do not report ``router_id``, ``dex_type`` or ``vault_code``.
    """

    is_locked: bool
    admin_address: Address
    temp_upgrade: Cell = field(repr=False)
    pool_code: Cell = field(repr=False)
    jetton_lp_wallet_code: Cell = field(repr=False)
    lp_account_code: Cell = field(repr=False)
    router_id: int | None = None
    dex_type: DexType | str | None = None
    vault_code: Cell | None = field(default=None, repr=False)


@dataclass(frozen=True)
class PoolDataV1:
    reserve0: int
    reserve1: int
    token0_wallet_address: Address
    token1_wallet_address: Address
    lp_fee: int
    protocol_fee: int
    ref_fee: int
    protocol_fee_address: Address | None
    collected_token0_protocol_fee: int
    collected_token1_protocol_fee: int


@dataclass(frozen=True)
class PoolDataV2:
    is_locked: bool
    router_address: Address
    total_supply_lp: int
    reserve0: int
    reserve1: int
    token0_wallet_address: Address
    token1_wallet_address: Address
    lp_fee: int
    protocol_fee: int
    protocol_fee_address: Address | None
    collected_token0_protocol_fee: int
    collected_token1_protocol_fee: int


@dataclass(frozen=True)
class StablePoolData(PoolDataV2):
    amp: int


@dataclass(frozen=True)
class WStablePoolData(PoolDataV2):
    amp: int
    rate: int
    w0: int
    rate_setter_address: Address | None


@dataclass(frozen=True)
class ExpectedOutputs:
    """Swap simulation from a v1 pool's ``get_expected_outputs``."""

    jetton_to_receive: int
    protocol_fee_paid: int
    ref_fee_paid: int


@dataclass(frozen=True)
class ExpectedLiquidity:
    amount0: int
    amount1: int


@dataclass(frozen=True)
class LpAccountData:
    user_address: Address
    pool_address: Address
    amount0: int
    amount1: int


@dataclass(frozen=True)
class VaultData:
    owner_address: Address
    token_address: Address
    router_address: Address
    deposited_amount: int
