"""Default gas tables and the override rules applied on top of them.

Every revision ships one immutable table keyed by ``(operation, deposit mode)``.
Callers may replace any single field; an explicit value always wins over the
table, and a missing field falls back to the table entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Any, TypeAlias

from tondex_paths.core.errors import InvalidParameterError
from tondex_paths.core.utils.units import to_coins, to_nano

from .revisions import DexRevision, resolve_revision


class GasOperation(StrEnum):
    SWAP_JETTON_TO_JETTON = "swap_jetton_to_jetton"
    SWAP_JETTON_TO_TON = "swap_jetton_to_ton"
    SWAP_TON_TO_JETTON = "swap_ton_to_jetton"
    PROVIDE_LP_JETTON = "provide_lp_jetton"
    PROVIDE_LP_TON = "provide_lp_ton"
    COLLECT_FEES = "collect_fees"
    BURN = "burn"
    REFUND = "refund"
    DIRECT_ADD_LP = "direct_add_lp"
    RESET_GAS = "reset_gas"
    WITHDRAW_FEE = "withdraw_fee"
    TON_TRANSFER = "ton_transfer"
    DEPLOY_WALLET = "deploy_wallet"


class DepositMode(StrEnum):
    BOTH_SIDES = "both_sides"
    SINGLE_SIDE = "single_side"


GasKey: TypeAlias = tuple[GasOperation, DepositMode]


@dataclass(frozen=True)
class GasAmounts:
    """Attached value and, for operations that forward a payload, the forwarded TON."""

    gas_amount: int | None = None
    forward_gas_amount: int | None = None

    def merged(self, override: GasAmounts) -> GasAmounts:
        return GasAmounts(
            gas_amount=(
                override.gas_amount
                if override.gas_amount is not None
                else self.gas_amount
            ),
            forward_gas_amount=(
                override.forward_gas_amount
                if override.forward_gas_amount is not None
                else self.forward_gas_amount
            ),
        )

    def require_gas_amount(self) -> int:
        if self.gas_amount is None:
            raise InvalidParameterError("gas_amount is not defined for this operation")
        return self.gas_amount

    def require_forward_gas_amount(self) -> int:
        if self.forward_gas_amount is None:
            raise InvalidParameterError(
                "forward_gas_amount is not defined for this operation"
            )
        return self.forward_gas_amount


def _amount(value: Any) -> int:
    # ints are nanotons, strings and floats are TON
    if isinstance(value, int) and not isinstance(value, bool):
        return to_coins(value)
    try:
        return to_nano(value)
    except ValueError as exc:
        raise InvalidParameterError(f"Invalid gas amount: {value!r}") from exc


def _coerce_amounts(value: GasAmounts | Mapping[str, Any] | int | str) -> GasAmounts:
    if isinstance(value, GasAmounts):
        return value
    if isinstance(value, Mapping):
        unknown = set(value) - {"gas_amount", "forward_gas_amount"}
        if unknown:
            raise InvalidParameterError(f"Unknown gas fields: {sorted(unknown)}")
        return GasAmounts(
            gas_amount=(
                _amount(value["gas_amount"])
                if value.get("gas_amount") is not None
                else None
            ),
            forward_gas_amount=(
                _amount(value["forward_gas_amount"])
                if value.get("forward_gas_amount") is not None
                else None
            ),
        )
    return GasAmounts(gas_amount=_amount(value))


def _coerce_key(key: GasOperation | GasKey | str) -> GasKey:
    if isinstance(key, GasOperation):
        return key, DepositMode.BOTH_SIDES
    if isinstance(key, tuple):
        operation, mode = key
    else:
        operation, _, mode = str(key).partition(":")
    try:
        return GasOperation(operation), DepositMode(mode or DepositMode.BOTH_SIDES)
    except ValueError as exc:
        raise InvalidParameterError(f"Unknown gas operation: {key!r}") from exc


@dataclass(frozen=True)
class GasConstants:
    revision: DexRevision
    table: Mapping[GasKey, GasAmounts] = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", MappingProxyType(dict(self.table)))

    def supports(
        self, operation: GasOperation, mode: DepositMode = DepositMode.BOTH_SIDES
    ) -> bool:
        return (operation, mode) in self.table

    def get(
        self, operation: GasOperation, mode: DepositMode = DepositMode.BOTH_SIDES
    ) -> GasAmounts:
        try:
            return self.table[(operation, mode)]
        except KeyError:
            raise InvalidParameterError(
                f"{operation} ({mode}) is not available in revision {self.revision}"
            ) from None

    def resolve(
        self,
        operation: GasOperation,
        mode: DepositMode = DepositMode.BOTH_SIDES,
        *,
        gas_amount: int | None = None,
        forward_gas_amount: int | None = None,
    ) -> GasAmounts:
        return self.get(operation, mode).merged(
            GasAmounts(
                gas_amount=None if gas_amount is None else to_coins(gas_amount),
                forward_gas_amount=(
                    None if forward_gas_amount is None else to_coins(forward_gas_amount)
                ),
            )
        )

    def with_overrides(
        self,
        overrides: Mapping[Any, GasAmounts | Mapping[str, Any] | int | str] | None,
    ) -> GasConstants:
        """Return a copy with ``overrides`` merged field by field.

        Keys are ``GasOperation`` values, ``(operation, mode)`` tuples or strings
        such as ``"provide_lp_jetton:single_side"``. Integer amounts are nanotons;
        string amounts are TON (``"0.3"``).
        """
        if not overrides:
            return self
        table = dict(self.table)
        for raw_key, raw_value in overrides.items():
            key = _coerce_key(raw_key)
            if key not in table:
                raise InvalidParameterError(
                    f"{key[0]} ({key[1]}) is not available in revision {self.revision}"
                )
            table[key] = table[key].merged(_coerce_amounts(raw_value))
        return replace(self, table=table)


def ton_native_value(
    offer_amount: int, forward_gas_amount: int, proxy_fee: int = 0
) -> int:
    """Value of a message that escrows the offered TON next to the forwarded gas."""
    return to_coins(offer_amount) + to_coins(forward_gas_amount) + to_coins(proxy_fee)


_BOTH = DepositMode.BOTH_SIDES
_SINGLE = DepositMode.SINGLE_SIDE


def _table(
    entries: Mapping[GasKey, tuple[str | None, str | None]],
) -> dict[GasKey, GasAmounts]:
    return {
        key: GasAmounts(
            gas_amount=None if gas is None else to_nano(gas),
            forward_gas_amount=None if fwd is None else to_nano(fwd),
        )
        for key, (gas, fwd) in entries.items()
    }


_V1_TABLE = _table(
    {
        (GasOperation.SWAP_JETTON_TO_JETTON, _BOTH): ("0.22", "0.175"),
        (GasOperation.SWAP_JETTON_TO_TON, _BOTH): ("0.17", "0.125"),
        (GasOperation.SWAP_TON_TO_JETTON, _BOTH): (None, "0.185"),
        (GasOperation.PROVIDE_LP_JETTON, _BOTH): ("0.3", "0.24"),
        (GasOperation.PROVIDE_LP_TON, _BOTH): (None, "0.26"),
        (GasOperation.COLLECT_FEES, _BOTH): ("1.1", None),
        (GasOperation.BURN, _BOTH): ("0.5", None),
        (GasOperation.REFUND, _BOTH): ("0.3", None),
        (GasOperation.DIRECT_ADD_LP, _BOTH): ("0.3", None),
        (GasOperation.RESET_GAS, _BOTH): ("0.3", None),
        # the v1 proxy charges nothing on top of the transferred TON
        (GasOperation.TON_TRANSFER, _BOTH): ("0", None),
        (GasOperation.DEPLOY_WALLET, _BOTH): ("1.05", None),
    }
)

_V2_TABLE = _table(
    {
        (GasOperation.SWAP_JETTON_TO_JETTON, _BOTH): ("0.3", "0.24"),
        (GasOperation.SWAP_JETTON_TO_TON, _BOTH): ("0.3", "0.24"),
        (GasOperation.SWAP_TON_TO_JETTON, _BOTH): (None, "0.3"),
        (GasOperation.PROVIDE_LP_JETTON, _BOTH): ("0.3", "0.235"),
        (GasOperation.PROVIDE_LP_JETTON, _SINGLE): ("1", "0.8"),
        (GasOperation.PROVIDE_LP_TON, _BOTH): (None, "0.3"),
        (GasOperation.PROVIDE_LP_TON, _SINGLE): (None, "0.8"),
        (GasOperation.COLLECT_FEES, _BOTH): ("0.4", None),
        (GasOperation.BURN, _BOTH): ("0.8", None),
        (GasOperation.REFUND, _BOTH): ("0.8", None),
        (GasOperation.DIRECT_ADD_LP, _BOTH): ("0.3", None),
        (GasOperation.RESET_GAS, _BOTH): ("0.02", None),
        (GasOperation.WITHDRAW_FEE, _BOTH): ("0.3", None),
        (GasOperation.TON_TRANSFER, _BOTH): ("0.01", None),
        (GasOperation.DEPLOY_WALLET, _BOTH): ("0.1", None),
    }
)

DEFAULT_GAS_CONSTANTS: Mapping[DexRevision, GasConstants] = MappingProxyType(
    {
        DexRevision.V1: GasConstants(DexRevision.V1, _V1_TABLE),
        DexRevision.V2: GasConstants(DexRevision.V2, _V2_TABLE),
        # v2.1 contracts were deployed with the v2 defaults
        DexRevision.V2_1: GasConstants(DexRevision.V2_1, _V2_TABLE),
    }
)


def default_gas_constants(revision: DexRevision | str) -> GasConstants:
    return DEFAULT_GAS_CONSTANTS[resolve_revision(revision)]


def resolve_gas(
    operation: GasOperation,
    revision: DexRevision | str,
    mode: DepositMode = DepositMode.BOTH_SIDES,
    overrides: GasAmounts | Mapping[str, Any] | None = None,
) -> GasAmounts:
    """Default amounts for ``operation`` in ``revision`` with ``overrides`` applied."""
    base = default_gas_constants(revision).get(operation, mode)
    if overrides is None:
        return base
    return base.merged(_coerce_amounts(overrides))
