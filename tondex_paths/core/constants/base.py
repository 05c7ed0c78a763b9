NANOTONS_PER_TON = 1_000_000_000
MAX_COINS = 2**120 - 1

DEFAULT_QUERY_ID = 0

# Timeout constants (seconds)
DEFAULT_HTTP_TIMEOUT = 30.0  # HTTP client timeout

# TEP-74 jetton transfer
JETTON_TRANSFER_OP = 0x0F8A7EA5

# addr_std with workchain 0 and an all-zero hash; used as "no address" by several get-methods
HOLE_ADDRESS = "0:0000000000000000000000000000000000000000000000000000000000000000"

ADAPTER_STONFI = "STONFI"
