from __future__ import annotations

from typing import Any, ClassVar

from pytoniq_core import Cell

from tondex_paths.core.constants.stonfi import DexOpV2_1, DexType
from tondex_paths.core.utils.ton import StackReader

from ..revisions import DexRevision
from ..types import StablePoolData, WStablePoolData
from ..v2.pool import PoolV2
from .lp_account import LpAccountV2_1


class PoolV2_1(PoolV2):  # noqa: N801
    revision = DexRevision.V2_1
    op_codes = DexOpV2_1
    dex_type: ClassVar[DexType | None] = None
    lp_account_class: ClassVar[type[LpAccountV2_1]] = LpAccountV2_1

    def create_burn_body(
        self,
        *,
        amount: int,
        dex_custom_payload: Cell | None = None,
        query_id: int | None = None,
    ) -> Cell:
        return super().create_burn_body(
            amount=amount, custom_payload=dex_custom_payload, query_id=query_id
        )


class CPIPoolV2_1(PoolV2_1):  # noqa: N801
    dex_type = DexType.CPI


class WCPIPoolV2_1(PoolV2_1):  # noqa: N801
    dex_type = DexType.WCPI


class StablePoolV2_1(PoolV2_1):  # noqa: N801
    dex_type = DexType.STABLE
    pool_data_class = StablePoolData

    def read_pool_data(self, stack: StackReader) -> dict[str, Any]:
        data = super().read_pool_data(stack)
        data["amp"] = stack.read_int()
        return data


class WStablePoolV2_1(PoolV2_1):  # noqa: N801
    dex_type = DexType.WSTABLE
    pool_data_class = WStablePoolData

    def read_pool_data(self, stack: StackReader) -> dict[str, Any]:
        data = super().read_pool_data(stack)
        data.update(
            amp=stack.read_int(),
            rate=stack.read_int(),
            w0=stack.read_int(),
            rate_setter_address=stack.read_address_opt(),
        )
        return data
