from __future__ import annotations

from tondex_paths.core.constants.stonfi import DexOpV2_1

from ..revisions import DexRevision
from ..v2.vault import VaultV2


class VaultV2_1(VaultV2):  # noqa: N801
    revision = DexRevision.V2_1
    op_codes = DexOpV2_1
