__version__ = "0.1.0"

from tondex_paths.core import (
    BaseAdapter,
    InvalidParameterError,
    RemoteCallError,
    TonDexError,
    UnknownRevisionError,
    UnmatchedRevisionError,
)

__all__ = [
    "__version__",
    "BaseAdapter",
    "TonDexError",
    "UnknownRevisionError",
    "UnmatchedRevisionError",
    "InvalidParameterError",
    "RemoteCallError",
]
