from tondex_paths.core.adapters.BaseAdapter import BaseAdapter
from tondex_paths.core.errors import (
    InvalidParameterError,
    RemoteCallError,
    TonDexError,
    UnknownRevisionError,
    UnmatchedRevisionError,
)

__all__ = [
    "BaseAdapter",
    "TonDexError",
    "UnknownRevisionError",
    "UnmatchedRevisionError",
    "InvalidParameterError",
    "RemoteCallError",
]
