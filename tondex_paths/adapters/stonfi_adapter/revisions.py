from __future__ import annotations

from enum import StrEnum

from tondex_paths.core.errors import UnknownRevisionError


class DexRevision(StrEnum):
    V1 = "v1"
    V2 = "v2"
    V2_1 = "v2_1"


_ALIASES = {
    "v2.1": DexRevision.V2_1,
    "2.1": DexRevision.V2_1,
    "2": DexRevision.V2,
    "1": DexRevision.V1,
}


def resolve_revision(revision: DexRevision | str) -> DexRevision:
    """Map a revision object or key (``"v1"``, ``"v2"``, ``"v2_1"``/``"v2.1"``) to ``DexRevision``."""
    if isinstance(revision, DexRevision):
        return revision
    if isinstance(revision, str):
        key = revision.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return DexRevision(key)
        except ValueError:
            pass
    raise UnknownRevisionError(revision)


def revision_from_version(major: int, minor: int) -> DexRevision:
    """Pick the revision matching a router's ``get_router_version`` answer."""
    if major == 1 and minor == 0:
        return DexRevision.V1
    if major == 2 and minor == 1:
        return DexRevision.V2_1
    if major == 2:
        return DexRevision.V2
    raise UnknownRevisionError(f"{major}.{minor}")
