from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, TypeAlias

from tondex_paths.core.config import get_gas_overrides
from tondex_paths.core.constants.base import DEFAULT_QUERY_ID
from tondex_paths.core.constants.stonfi import (
    DEFAULT_REFERRAL_VALUE,
    MAX_REFERRAL_VALUE,
)
from tondex_paths.core.errors import InvalidParameterError, UnmatchedRevisionError
from tondex_paths.core.utils.contract import OnChainEntity
from tondex_paths.core.utils.ton import AddressLike

from .gas import GasConstants, default_gas_constants
from .revisions import DexRevision

GasOverrides: TypeAlias = GasConstants | Mapping[Any, Any] | None


class DexContract(OnChainEntity):
    """An address bound to one protocol revision and its gas table.

    The gas table is fixed at construction: revision defaults adjusted by
    ``gas_defaults``, then ``stonfi.gas_overrides.<revision>.<role>`` from
    config, then ``gas_constants``.
    """

    revision: ClassVar[DexRevision]
    role: ClassVar[str]
    # per-class adjustments to the revision table, e.g. pricier weighted curves
    gas_defaults: ClassVar[Mapping[Any, Any] | None] = None

    def __init__(self, address: AddressLike, *, gas_constants: GasOverrides = None):
        super().__init__(address)
        explicit = (
            gas_constants.table
            if isinstance(gas_constants, GasConstants)
            else gas_constants
        )
        self._gas_constants = (
            default_gas_constants(self.revision)
            .with_overrides(self.gas_defaults)
            .with_overrides(get_gas_overrides(self.revision, self.role))
            .with_overrides(explicit)
        )
        self.logger = self.logger.bind(revision=str(self.revision))

    @property
    def gas_constants(self) -> GasConstants:
        return self._gas_constants


def query_id_or_default(query_id: int | None) -> int:
    return DEFAULT_QUERY_ID if query_id is None else int(query_id)


def checked_referral_value(referral_value: int | None) -> int:
    """Referral numerator in basis points; never clamped."""
    if referral_value is None:
        return DEFAULT_REFERRAL_VALUE
    value = int(referral_value)
    if not 0 <= value <= MAX_REFERRAL_VALUE:
        raise InvalidParameterError(
            f"'referral_value' should be in range [0, {MAX_REFERRAL_VALUE}] BPS, "
            f"got {value}"
        )
    return value


def ensure_same_revision(expected: DexRevision, helper: DexContract) -> None:
    """Refuse a helper contract (e.g. a proxy TON) from another revision."""
    if helper.revision != expected:
        raise UnmatchedRevisionError(
            expected=str(expected), received=str(helper.revision)
        )
