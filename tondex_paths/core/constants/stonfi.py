from enum import IntEnum, StrEnum

ROUTER_V1_ADDRESS = "EQB3ncyBUTjZUA5EnFKR5_EnOMI9V1tTEAAPaiU71gc4TiUt"
PTON_V1_ADDRESS = "EQCM3B12QK1e4yZSf8GtBRT0aLMNyEsBc_DhVfRRtOEffLez"

# Seconds added to "now" when a v2.1 body is built without an explicit deadline
TX_DEADLINE = 15 * 60

DEFAULT_REFERRAL_VALUE = 10
MAX_REFERRAL_VALUE = 100


class DexType(StrEnum):
    CPI = "constant_product"
    STABLE = "stableswap"
    WCPI = "weighted_const_product"
    WSTABLE = "weighted_stableswap"


class DexOpV1(IntEnum):
    SWAP = 0x25938561
    PROVIDE_LP = 0xFCF9E58F
    DIRECT_ADD_LIQUIDITY = 0x4CF82803
    REFUND = 0x0BF3F447
    RESET_GAS = 0x42A0FB43
    COLLECT_FEES = 0x1FCB7D3D
    REQUEST_BURN = 0x595F07BC


class DexOpV2(IntEnum):
    # v2 routers still answer to the v1 opcodes
    SWAP = 0x25938561
    PROVIDE_LP = 0xFCF9E58F
    DIRECT_ADD_LIQUIDITY = 0x4CF82803
    REFUND_ME = 0x0BF3F447
    RESET_GAS = 0x42A0FB43
    COLLECT_FEES = 0x1FCB7D3D
    BURN = 0x595F07BC
    WITHDRAW_FEE = 0x354BCDF4


class DexOpV2_1(IntEnum):  # noqa: N801
    SWAP = 0x6664DE2A
    CROSS_SWAP = 0x69CF1A5B
    PROVIDE_LP = 0x37C096DF
    CROSS_PROVIDE_LP = 0x5C11ADA9
    DIRECT_ADD_LIQUIDITY = 0x0FF8BFC6
    REFUND_ME = 0x132B9A2C
    RESET_GAS = 0x29D22935
    COLLECT_FEES = 0x1EE4911E
    BURN = 0x595F07BC
    WITHDRAW_FEE = 0x354BCDF4


class PtonOpV1(IntEnum):
    DEPLOY_WALLET = 0x6CC43573


class PtonOpV2(IntEnum):
    TON_TRANSFER = 0x01F3835D
    DEPLOY_WALLET = 0x4F5F4313
