"""Revision → contract classes.

Resolution happens when a wrapper is built, so an unknown revision key fails
before any get-method is issued. v2.1 routers and pools also come in one
class per pool curve (``dex_type``); the plain v2.1 classes serve any curve.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from tondex_paths.core.constants.stonfi import DexType
from tondex_paths.core.errors import InvalidParameterError
from tondex_paths.core.utils.ton import AddressLike

from .pton import PtonV1, PtonV2, PtonV2_1
from .revisions import DexRevision, resolve_revision, revision_from_version
from .v1.lp_account import LpAccountV1
from .v1.pool import PoolV1
from .v1.router import RouterV1
from .v2.lp_account import LpAccountV2
from .v2.pool import PoolV2
from .v2.router import RouterV2
from .v2.vault import VaultV2
from .v2_1.lp_account import LpAccountV2_1
from .v2_1.pool import (
    CPIPoolV2_1,
    PoolV2_1,
    StablePoolV2_1,
    WCPIPoolV2_1,
    WStablePoolV2_1,
)
from .v2_1.router import (
    CPIRouterV2_1,
    RouterV2_1,
    StableRouterV2_1,
    WCPIRouterV2_1,
    WStableRouterV2_1,
)
from .v2_1.vault import VaultV2_1

# router types as the STON.fi API reports them
_DEX_TYPE_ALIASES = {
    "ConstantProduct": DexType.CPI,
    "StableSwap": DexType.STABLE,
    "WeightedConstProduct": DexType.WCPI,
    "WeightedStableSwap": DexType.WSTABLE,
}


@dataclass(frozen=True)
class DexContracts:
    router: type[RouterV1] | type[RouterV2]
    pool: type[PoolV1] | type[PoolV2]
    lp_account: type[LpAccountV1] | type[LpAccountV2]
    pton: type[PtonV1] | type[PtonV2]
    vault: type[VaultV2] | None = None
    dex_types: Mapping[DexType, tuple[type[RouterV2_1], type[PoolV2_1]]] = field(
        default_factory=dict, repr=False
    )


DEX: Mapping[DexRevision, DexContracts] = MappingProxyType(
    {
        DexRevision.V1: DexContracts(
            router=RouterV1, pool=PoolV1, lp_account=LpAccountV1, pton=PtonV1
        ),
        DexRevision.V2: DexContracts(
            router=RouterV2,
            pool=PoolV2,
            lp_account=LpAccountV2,
            pton=PtonV2,
            vault=VaultV2,
        ),
        DexRevision.V2_1: DexContracts(
            router=RouterV2_1,
            pool=PoolV2_1,
            lp_account=LpAccountV2_1,
            pton=PtonV2_1,
            vault=VaultV2_1,
            dex_types=MappingProxyType(
                {
                    DexType.CPI: (CPIRouterV2_1, CPIPoolV2_1),
                    DexType.STABLE: (StableRouterV2_1, StablePoolV2_1),
                    DexType.WCPI: (WCPIRouterV2_1, WCPIPoolV2_1),
                    DexType.WSTABLE: (WStableRouterV2_1, WStablePoolV2_1),
                }
            ),
        ),
    }
)


def resolve_dex_type(dex_type: DexType | str) -> DexType:
    """Accept ``DexType`` values (``"stableswap"``) or API names (``"StableSwap"``)."""
    if isinstance(dex_type, DexType):
        return dex_type
    if dex_type in _DEX_TYPE_ALIASES:
        return _DEX_TYPE_ALIASES[dex_type]
    try:
        return DexType(dex_type)
    except ValueError:
        raise InvalidParameterError(
            f"Unsupported router type: {dex_type!r}"
        ) from None


def contracts_for(
    revision: DexRevision | str, dex_type: DexType | str | None = None
) -> DexContracts:
    contracts = DEX[resolve_revision(revision)]
    if dex_type is None:
        return contracts
    if not contracts.dex_types:
        raise InvalidParameterError(
            f"Revision {contracts.router.revision} has no per-curve contracts"
        )
    router, pool = contracts.dex_types[resolve_dex_type(dex_type)]
    return replace(contracts, router=router, pool=pool)


def dex_factory(
    major: int, minor: int, router_type: DexType | str | None = None
) -> DexContracts:
    """Contract classes for a router's ``get_router_version`` answer.

    ``router_type`` narrows v2.1 to the curve's classes; revisions without
    per-curve classes ignore it.
    """
    revision = revision_from_version(major, minor)
    if router_type is None or not DEX[revision].dex_types:
        return DEX[revision]
    return contracts_for(revision, router_type)


def router_for(
    revision: DexRevision | str,
    address: AddressLike | None = None,
    *,
    dex_type: DexType | str | None = None,
    **kwargs: Any,
) -> RouterV1 | RouterV2:
    """Router wrapper; ``address`` may be omitted only for v1."""
    cls = contracts_for(revision, dex_type).router
    if address is None:
        if cls is not RouterV1:
            raise InvalidParameterError(
                f"{cls.revision} routers have no default address"
            )
        return RouterV1(**kwargs)
    return cls(address, **kwargs)


def pool_for(
    revision: DexRevision | str,
    address: AddressLike,
    *,
    dex_type: DexType | str | None = None,
    **kwargs: Any,
) -> PoolV1 | PoolV2:
    return contracts_for(revision, dex_type).pool(address, **kwargs)


def lp_account_for(
    revision: DexRevision | str, address: AddressLike, **kwargs: Any
) -> LpAccountV1 | LpAccountV2:
    return contracts_for(revision).lp_account(address, **kwargs)


def vault_for(
    revision: DexRevision | str, address: AddressLike, **kwargs: Any
) -> VaultV2:
    contracts = contracts_for(revision)
    if contracts.vault is None:
        raise InvalidParameterError(
            f"Vaults do not exist in revision {contracts.router.revision}"
        )
    return contracts.vault(address, **kwargs)


def pton_for(
    revision: DexRevision | str, address: AddressLike | None = None, **kwargs: Any
) -> PtonV1 | PtonV2:
    cls = contracts_for(revision).pton
    if address is None:
        if cls is not PtonV1:
            raise InvalidParameterError(
                f"{cls.revision} proxy TON has no default address"
            )
        return PtonV1(**kwargs)
    return cls(address, **kwargs)
