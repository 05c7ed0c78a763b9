from tondex_paths.core.clients.protocols import ChainProvider, Sender
from tondex_paths.core.clients.ToncenterClient import ToncenterClient

__all__ = [
    "ChainProvider",
    "Sender",
    "ToncenterClient",
]
