import pytest
from pytoniq_core import Address, begin_cell

from tondex_paths.adapters.stonfi_adapter.gas import GasOperation
from tondex_paths.adapters.stonfi_adapter.pton import PtonV2, PtonV2_1
from tondex_paths.adapters.stonfi_adapter.types import (
    PoolDataV2,
    StablePoolData,
    WStablePoolData,
)
from tondex_paths.adapters.stonfi_adapter.v2_1.lp_account import LpAccountV2_1
from tondex_paths.adapters.stonfi_adapter.v2_1.pool import (
    CPIPoolV2_1,
    PoolV2_1,
    StablePoolV2_1,
    WCPIPoolV2_1,
    WStablePoolV2_1,
)
from tondex_paths.adapters.stonfi_adapter.v2_1.router import (
    CPIRouterV2_1,
    RouterV2_1,
    StableRouterV2_1,
    WCPIRouterV2_1,
    WStableRouterV2_1,
)
from tondex_paths.adapters.stonfi_adapter.v2_1.vault import VaultV2_1
from tondex_paths.core.config import CONFIG
from tondex_paths.core.constants.stonfi import ROUTER_V1_ADDRESS, DexOpV2_1, DexType
from tondex_paths.core.errors import InvalidParameterError, UnmatchedRevisionError
from tondex_paths.testing.chain import address_cell, boc_cell

USER = "UQAQnxLqlX2B6w4jQzzzPWA8eyWZVZBz6Y0D_8noARLOaEAn"
ROUTER = "kQCas2p939ESyXM_BzFJzcIe3GD5S0tbjJDj6EBVn-SPsEkN"
OFFER_JETTON = "kQDLvsZol3juZyOAVG8tWsJntOxeEZWEaWCbbSjYakQpuYN5"
ASK_JETTON = "kQB_TOJSB7q3-Jm1O8s0jKFtqLElZDPjATs5uJGsujcjznq3"
PTON = "kQAcOvXSnnOhCdLYc6up2ECYwtNNTzlmOlidBeCs5cFPV7AM"
ROUTER_ASK_WALLET_ADDRESS = "EQAIBnMGyR4vXuaF3OzR80LIZ2Z_pe3z-_t_q6Blu2HKLeaY"
POOL = "EQDi0bJhkvB86vEK7mjaa508xwSB4mnk8zXLdmb0AtsO4iG7"
LP_ACCOUNT = "EQAAPP517U137Zx7xkNgzm662hGlxuL20iiQDRtwemhWTPLx"
VAULT = "EQB1HMY-_uCVDH4MkShZrf4tathj8_RNvdF6ChuFl7Vbt1tu"
LP_WALLET = "EQD5SDeFVvz8HjVZiwgxLR6UugyJxrSzAGztgGokzVyOD5pV"

USER_OFFER_WALLET = boc_cell(
    "te6ccsEBAQEAJAAAAEOACD+9EGh6wT/2pEbZWrfCmVbsdpQVGU9308qh2gel9QwQM97q5A=="
)
ROUTER_ASK_WALLET = boc_cell(
    "te6ccsEBAQEAJAAAAEOAAQDOYNkjxevc0Ludmj5oWQzsz/S9vn9/b/V0DLdsOUWw40LsPA=="
)
ROUTER_PTON_WALLET = boc_cell(
    "te6ccsEBAQEAJAAAAEOAAioWoxZMTVqjEz8xEP8QSW4AyorIq+/8UCfgJNM0gMPwJB4oTQ=="
)

SWAP_BODY = (
    "te6cckEBAgEAoAAB4WZk3iqAD+mcSkD3Vv8TNqd5ZpGULbUWJKyGfGAnZzcSNZdG5HnQAEJ8S6pV9gesOI0M88z1gPHslmVWQc+mNA//J6AESzmiAAhPiXVKvsD1hxGhnnmesB49ksyqyDn0xoH/5PQAiWc0AAAAAAAAAcJAAQBTQ1pOkAgAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAUQsBQ24Q=="
)


@pytest.fixture
def router():
    return RouterV2_1(ROUTER)


@pytest.fixture
def wallets(fake_chain):
    fake_chain.on(OFFER_JETTON, "get_wallet_address", [USER_OFFER_WALLET])
    fake_chain.on(ASK_JETTON, "get_wallet_address", [ROUTER_ASK_WALLET])
    fake_chain.on(PTON, "get_wallet_address", [ROUTER_PTON_WALLET])
    return fake_chain


def _swap_args(**overrides):
    args = {
        "ask_jetton_wallet_address": ASK_JETTON,
        "receiver_address": USER,
        "min_ask_amount": 900_000_000,
        "refund_address": USER,
        "deadline": 900,
    }
    args.update(overrides)
    return args


class TestRouterV2_1Construction:
    def test_rejects_v1_router_address(self):
        with pytest.raises(InvalidParameterError, match="v1 router address"):
            RouterV2_1(ROUTER_V1_ADDRESS)

    def test_tx_deadline_from_config(self, monkeypatch):
        monkeypatch.setitem(CONFIG, "stonfi", {"tx_deadline": 60})
        assert RouterV2_1(ROUTER).tx_deadline == 60

    def test_explicit_tx_deadline_wins(self, monkeypatch):
        monkeypatch.setitem(CONFIG, "stonfi", {"tx_deadline": 60})
        assert RouterV2_1(ROUTER, tx_deadline=30).tx_deadline == 30

    def test_default_deadline_is_relative_to_now(self, monkeypatch):
        monkeypatch.setattr(
            "tondex_paths.adapters.stonfi_adapter.v2_1.router.time.time",
            lambda: 1_700_000_000.7,
        )
        assert RouterV2_1(ROUTER, tx_deadline=900).default_deadline() == 1_700_000_900


class TestRouterV2_1Payloads:
    def test_swap_body(self, router):
        body = router.create_swap_body(**_swap_args())
        assert body.hash == boc_cell(SWAP_BODY).hash

    def test_swap_body_uses_default_deadline(self, monkeypatch):
        monkeypatch.setattr(
            "tondex_paths.adapters.stonfi_adapter.v2_1.router.time.time", lambda: 0
        )
        router = RouterV2_1(ROUTER, tx_deadline=900)

        body = router.create_swap_body(**_swap_args(deadline=None))

        assert body.hash == boc_cell(SWAP_BODY).hash

    def test_swap_body_with_referral(self, router):
        body = router.create_swap_body(**_swap_args(referral_address=USER))
        assert body.hash == boc_cell(
            "te6cckEBAgEAwQAB4WZk3iqAD+mcSkD3Vv8TNqd5ZpGULbUWJKyGfGAnZzcSNZdG5HnQAEJ8S6pV9gesOI0M88z1gPHslmVWQc+mNA//J6AESzmiAAhPiXVKvsD1hxGhnnmesB49ksyqyDn0xoH/5PQAiWc0AAAAAAAAAcJAAQCVQ1pOkAgAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAVAAQnxLqlX2B6w4jQzzzPWA8eyWZVZBz6Y0D/8noARLOaIZMcmAw=="
        ).hash

    def test_swap_body_with_explicit_deadline(self, router):
        body = router.create_swap_body(**_swap_args(deadline=1000))
        assert body.hash == boc_cell(
            "te6cckEBAgEAoAAB4WZk3iqAD+mcSkD3Vv8TNqd5ZpGULbUWJKyGfGAnZzcSNZdG5HnQAEJ8S6pV9gesOI0M88z1gPHslmVWQc+mNA//J6AESzmiAAhPiXVKvsD1hxGhnnmesB49ksyqyDn0xoH/5PQAiWc0AAAAAAAAAfRAAQBTQ1pOkAgAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAUQdPVUag=="
        ).hash

    def test_cross_swap_body(self, router):
        body = router.create_cross_swap_body(**_swap_args())
        assert body.hash == boc_cell(
            "te6cckEBAgEAoAAB4WnPGluAD+mcSkD3Vv8TNqd5ZpGULbUWJKyGfGAnZzcSNZdG5HnQAEJ8S6pV9gesOI0M88z1gPHslmVWQc+mNA//J6AESzmiAAhPiXVKvsD1hxGhnnmesB49ksyqyDn0xoH/5PQAiWc0AAAAAAAAAcJAAQBTQ1pOkAgAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAUQBHeB8A=="
        ).hash

    def test_deadline_sits_after_the_excesses_address(self, router):
        body = router.create_swap_body(**_swap_args(deadline=123_456))

        slice_ = body.begin_parse()
        assert slice_.load_uint(32) == DexOpV2_1.SWAP
        assert slice_.load_address() == Address(ASK_JETTON)
        assert slice_.load_address() == Address(USER)
        assert slice_.load_address() == Address(USER)
        assert slice_.load_uint(64) == 123_456

    @pytest.mark.parametrize("referral_value", [-1, 101, 200])
    def test_referral_value_out_of_range(self, router, referral_value):
        with pytest.raises(InvalidParameterError, match="referral_value"):
            router.create_swap_body(**_swap_args(referral_value=referral_value))

    @pytest.mark.parametrize("referral_value", [-1, 101])
    def test_cross_swap_referral_value_out_of_range(self, router, referral_value):
        with pytest.raises(InvalidParameterError, match="referral_value"):
            router.create_cross_swap_body(**_swap_args(referral_value=referral_value))

    @pytest.mark.parametrize("referral_value", [0, 100])
    def test_cross_swap_referral_value_bounds_are_accepted(
        self, router, referral_value
    ):
        body = router.create_cross_swap_body(
            **_swap_args(referral_value=referral_value)
        )
        assert body.begin_parse().load_uint(32) == DexOpV2_1.CROSS_SWAP
        extension = body.refs[0].begin_parse()
        extension.load_coins()
        extension.load_address()
        extension.load_coins()
        extension.load_bit()
        extension.load_coins()
        extension.load_bit()
        assert extension.load_uint(16) == referral_value

    @pytest.mark.parametrize("referral_value", [0, 100])
    def test_referral_value_bounds_are_accepted(self, router, referral_value):
        body = router.create_swap_body(**_swap_args(referral_value=referral_value))
        extension = body.refs[0].begin_parse()
        extension.load_coins()
        extension.load_address()
        extension.load_coins()
        assert extension.load_bit() == 0
        extension.load_coins()
        assert extension.load_bit() == 0
        assert extension.load_uint(16) == referral_value

    def test_provide_liquidity_body(self, router):
        body = router.create_provide_liquidity_body(
            router_wallet_address=ROUTER_ASK_WALLET_ADDRESS,
            receiver_address=USER,
            min_lp_out=900_000_000,
            refund_address=USER,
            both_positive=True,
            deadline=900,
        )
        assert body.hash == boc_cell(
            "te6cckEBAgEAnQAB4TfAlt+AAQDOYNkjxevc0Ludmj5oWQzsz/S9vn9/b/V0DLdsOUWwAEJ8S6pV9gesOI0M88z1gPHslmVWQc+mNA//J6AESzmiAAhPiXVKvsD1hxGhnnmesB49ksyqyDn0xoH/5PQAiWc0AAAAAAAAAcJAAQBNQ1pOkAgAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNEEFrlX4Q=="
        ).hash

    def test_cross_provide_liquidity_body_opcode(self, router):
        body = router.create_cross_provide_liquidity_body(
            router_wallet_address=ROUTER_ASK_WALLET_ADDRESS,
            receiver_address=USER,
            min_lp_out=1,
            refund_address=USER,
            deadline=900,
        )
        assert body.begin_parse().load_uint(32) == DexOpV2_1.CROSS_PROVIDE_LP


class TestRouterV2_1Transactions:
    @pytest.mark.asyncio
    async def test_swap_jetton_to_jetton(self, router, wallets):
        tx = await router.get_swap_jetton_to_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            offer_jetton_address=OFFER_JETTON,
            ask_jetton_address=ASK_JETTON,
            offer_amount=500_000_000,
            min_ask_amount=200_000_000,
            deadline=900,
        )

        assert tx.to == Address("EQBB_eiDQ9YJ_7UiNsrVvhTKt2O0oKjKe76eVQ7QPS-oYPsi")
        assert tx.value == 300_000_000
        assert tx.body.hash == boc_cell(
            "te6cckEBAwEA+wABsA+KfqUAAAAAAAAAAEHc1lAIATVm1Pu/oiWS5n4OYpObhD24wfKWlrcZIcfQgKs/yR9hAAQnxLqlX2B6w4jQzzzPWA8eyWZVZBz6Y0D/8noARLOaCBycOAEBAeFmZN4qgAEAzmDZI8Xr3NC7nZo+aFkM7M/0vb5/f2/1dAy3bDlFsABCfEuqVfYHrDiNDPPM9YDx7JZlVkHPpjQP/yegBEs5ogAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAAAAAAHCQAIAU0C+vCAIACE+JdUq+wPWHEaGeeZ6wHj2SzKrIOfTGgf/k9ACJZzQAAAFEKNZKeA="
        ).hash

    @pytest.mark.asyncio
    async def test_swap_rejects_referral_before_any_lookup(self, router, wallets):
        with pytest.raises(InvalidParameterError):
            await router.get_swap_jetton_to_jetton_tx_params(
                wallets,
                user_wallet_address=USER,
                offer_jetton_address=OFFER_JETTON,
                ask_jetton_address=ASK_JETTON,
                offer_amount=500_000_000,
                min_ask_amount=200_000_000,
                referral_value=200,
            )
        assert wallets.calls == []

    @pytest.mark.asyncio
    async def test_swap_jetton_to_ton(self, router, wallets):
        tx = await router.get_swap_jetton_to_ton_tx_params(
            wallets,
            user_wallet_address=USER,
            offer_jetton_address=OFFER_JETTON,
            proxy_ton=PtonV2_1(PTON),
            offer_amount=500_000_000,
            min_ask_amount=200_000_000,
            deadline=900,
        )

        assert tx.to == Address("EQBB_eiDQ9YJ_7UiNsrVvhTKt2O0oKjKe76eVQ7QPS-oYPsi")
        assert tx.value == 300_000_000
        assert tx.body.hash == boc_cell(
            "te6cckEBAwEA+wABsA+KfqUAAAAAAAAAAEHc1lAIATVm1Pu/oiWS5n4OYpObhD24wfKWlrcZIcfQgKs/yR9hAAQnxLqlX2B6w4jQzzzPWA8eyWZVZBz6Y0D/8noARLOaCBycOAEBAeFmZN4qgAIqFqMWTE1aoxM/MRD/EEluAMqKyKvv/FAn4CTTNIDD8ABCfEuqVfYHrDiNDPPM9YDx7JZlVkHPpjQP/yegBEs5ogAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAAAAAAHCQAIAU0C+vCAIACE+JdUq+wPWHEaGeeZ6wHj2SzKrIOfTGgf/k9ACJZzQAAAFEOCS/Uw="
        ).hash

    @pytest.mark.asyncio
    async def test_swap_jetton_to_ton_refuses_v2_proxy(self, router, wallets):
        with pytest.raises(UnmatchedRevisionError):
            await router.get_swap_jetton_to_ton_tx_params(
                wallets,
                user_wallet_address=USER,
                offer_jetton_address=OFFER_JETTON,
                proxy_ton=PtonV2(PTON),
                offer_amount=500_000_000,
                min_ask_amount=200_000_000,
            )

    @pytest.mark.asyncio
    async def test_swap_ton_to_jetton(self, router, wallets):
        tx = await router.get_swap_ton_to_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            proxy_ton=PtonV2_1(PTON),
            ask_jetton_address=ASK_JETTON,
            offer_amount=500_000_000,
            min_ask_amount=200_000_000,
            deadline=900,
        )

        assert tx.to == Address("EQARULUYsmJq1RiZ-YiH-IJLcAZUVkVff-KBPwEmmaQGH6aC")
        # offer + forward gas + proxy fee
        assert tx.value == 500_000_000 + 300_000_000 + 10_000_000

        slice_ = tx.body.begin_parse()
        assert slice_.load_uint(32) == 0x01F3835D
        assert slice_.load_uint(64) == 0
        assert slice_.load_coins() == 500_000_000
        assert slice_.load_address() == Address(USER)
        assert slice_.load_bit() == 1
        forwarded = tx.body.refs[0]
        assert forwarded.hash == router.create_swap_body(
            **_swap_args(
                ask_jetton_wallet_address=ROUTER_ASK_WALLET_ADDRESS,
                min_ask_amount=200_000_000,
            )
        ).hash

    @pytest.mark.asyncio
    async def test_swap_receiver_may_differ_from_sender(self, router, wallets):
        other = "EQD9KyZJ3cwbaDphNjXa_nJvxApEUJOvFGZrcbDTuke6Fs7B"
        tx = await router.get_swap_jetton_to_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            offer_jetton_address=OFFER_JETTON,
            ask_jetton_address=ASK_JETTON,
            offer_amount=500_000_000,
            min_ask_amount=200_000_000,
            receiver_address=other,
            deadline=900,
        )

        payload = tx.body.refs[-1]
        extension = payload.refs[0].begin_parse()
        extension.load_coins()
        assert extension.load_address() == Address(other)
        # refund still defaults to the sender
        head = payload.begin_parse()
        head.load_uint(32)
        head.load_address()
        assert head.load_address() == Address(USER)

    @pytest.mark.asyncio
    async def test_jetton_custom_payload_rides_in_the_transfer(self, router, wallets):
        custom = begin_cell().store_uint(0xDEAD, 16).end_cell()
        tx = await router.get_swap_jetton_to_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            offer_jetton_address=OFFER_JETTON,
            ask_jetton_address=ASK_JETTON,
            offer_amount=500_000_000,
            min_ask_amount=200_000_000,
            deadline=900,
            jetton_custom_payload=custom,
        )

        assert tx.body.refs[0].hash == custom.hash

    @pytest.mark.asyncio
    async def test_dex_custom_payload_reaches_the_body(self, router, wallets):
        custom = begin_cell().store_uint(3, 8).end_cell()

        tx = await router.get_swap_jetton_to_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            offer_jetton_address=OFFER_JETTON,
            ask_jetton_address=ASK_JETTON,
            offer_amount=500_000_000,
            min_ask_amount=200_000_000,
            dex_custom_payload=custom,
            dex_custom_payload_forward_gas_amount=7,
            deadline=900,
        )

        extension = tx.body.refs[-1].refs[0].begin_parse()
        extension.load_coins()
        extension.load_address()
        assert extension.load_coins() == 7
        assert extension.load_maybe_ref().hash == custom.hash

    @pytest.mark.asyncio
    async def test_v2_payload_field_names_are_refused_before_lookups(
        self, router, wallets
    ):
        with pytest.raises(InvalidParameterError, match="custom_payload"):
            await router.get_provide_liquidity_jetton_tx_params(
                wallets,
                user_wallet_address=USER,
                send_token_address=OFFER_JETTON,
                other_token_address=ASK_JETTON,
                send_amount=500_000_000,
                min_lp_out=1,
                custom_payload=begin_cell().end_cell(),
            )
        assert wallets.calls == []

    @pytest.mark.asyncio
    async def test_provide_liquidity_jetton(self, router, wallets):
        tx = await router.get_provide_liquidity_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            send_token_address=OFFER_JETTON,
            other_token_address=ASK_JETTON,
            send_amount=500_000_000,
            min_lp_out=1,
            deadline=900,
        )

        assert tx.to == Address("EQBB_eiDQ9YJ_7UiNsrVvhTKt2O0oKjKe76eVQ7QPS-oYPsi")
        assert tx.value == 300_000_000
        assert tx.body.hash == boc_cell(
            "te6cckEBAwEA9QABsA+KfqUAAAAAAAAAAEHc1lAIATVm1Pu/oiWS5n4OYpObhD24wfKWlrcZIcfQgKs/yR9hAAQnxLqlX2B6w4jQzzzPWA8eyWZVZBz6Y0D/8noARLOaCBwDoYEBAeE3wJbfgAEAzmDZI8Xr3NC7nZo+aFkM7M/0vb5/f2/1dAy3bDlFsABCfEuqVfYHrDiNDPPM9YDx7JZlVkHPpjQP/yegBEs5ogAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAAAAAAHCQAIARxAYACE+JdUq+wPWHEaGeeZ6wHj2SzKrIOfTGgf/k9ACJZzRBNLqJ9k="
        ).hash

    @pytest.mark.asyncio
    async def test_single_side_provide_liquidity_jetton(self, router, wallets):
        tx = await router.get_single_side_provide_liquidity_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            send_token_address=OFFER_JETTON,
            other_token_address=ASK_JETTON,
            send_amount=500_000_000,
            min_lp_out=1,
            deadline=900,
        )

        assert tx.value == 1_000_000_000
        assert tx.body.hash == boc_cell(
            "te6cckEBAwEA9QABsA+KfqUAAAAAAAAAAEHc1lAIATVm1Pu/oiWS5n4OYpObhD24wfKWlrcZIcfQgKs/yR9hAAQnxLqlX2B6w4jQzzzPWA8eyWZVZBz6Y0D/8noARLOaCF9eEAEBAeE3wJbfgAEAzmDZI8Xr3NC7nZo+aFkM7M/0vb5/f2/1dAy3bDlFsABCfEuqVfYHrDiNDPPM9YDx7JZlVkHPpjQP/yegBEs5ogAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNAAAAAAAAAHCQAIARxAYACE+JdUq+wPWHEaGeeZ6wHj2SzKrIOfTGgf/k9ACJZzQBDg9pog="
        ).hash

    @pytest.mark.asyncio
    async def test_single_side_provide_liquidity_ton(self, router, wallets):
        tx = await router.get_single_side_provide_liquidity_ton_tx_params(
            wallets,
            user_wallet_address=USER,
            proxy_ton=PtonV2_1(PTON),
            other_token_address=ASK_JETTON,
            send_amount=500_000_000,
            min_lp_out=1,
            deadline=900,
        )

        assert tx.value == 500_000_000 + 800_000_000 + 10_000_000
        extension = tx.body.refs[0].refs[0].begin_parse()
        extension.load_coins()
        extension.load_address()
        # both_positive is cleared for single-side deposits
        assert extension.load_bit() == 0


class TestPoolV2_1:
    def test_burn_body(self):
        body = PoolV2_1(POOL).create_burn_body(amount=1_000_000_000)
        assert body.hash == boc_cell(
            "te6cckEBAQEAEwAAIVlfB7wAAAAAAAAAAEO5rKABu8koZQ=="
        ).hash

    def test_burn_body_with_query_id(self):
        body = PoolV2_1(POOL).create_burn_body(amount=1_000_000_000, query_id=12345)
        assert body.hash == boc_cell(
            "te6cckEBAQEAEwAAIVlfB7wAAAAAAAAwOUO5rKABFeXmDg=="
        ).hash

    @pytest.mark.asyncio
    async def test_burn_tx_params(self, fake_chain):
        fake_chain.jetton_wallet(POOL, USER, LP_WALLET)
        pool = PoolV2_1(POOL)

        tx = await pool.get_burn_tx_params(
            fake_chain, amount=1_000_000_000, user_wallet_address=USER
        )

        assert tx.to == Address(LP_WALLET)
        assert tx.value == 800_000_000
        assert tx.body.hash == pool.create_burn_body(amount=1_000_000_000).hash

    @pytest.mark.asyncio
    async def test_burn_tx_params_carries_dex_custom_payload(self, fake_chain):
        fake_chain.jetton_wallet(POOL, USER, LP_WALLET)
        custom = begin_cell().store_uint(5, 8).end_cell()

        tx = await PoolV2_1(POOL).get_burn_tx_params(
            fake_chain,
            amount=1_000_000_000,
            user_wallet_address=USER,
            dex_custom_payload=custom,
            query_id=12345,
        )

        slice_ = tx.body.begin_parse()
        assert slice_.load_uint(32) == DexOpV2_1.BURN
        assert slice_.load_uint(64) == 12345
        assert tx.body.refs[0].hash == custom.hash

    def test_collect_fees_body(self):
        body = PoolV2_1(POOL).create_collect_fees_body()
        assert body.hash == boc_cell("te6cckEBAQEADgAAGB7kkR4AAAAAAAAAAPr6RWc=").hash

    @pytest.mark.asyncio
    async def test_get_lp_account_returns_revision_class(self, fake_chain):
        fake_chain.on(POOL, "get_lp_account_address", [address_cell(LP_ACCOUNT)])

        lp_account = await PoolV2_1(POOL).get_lp_account(
            fake_chain, owner_address=USER
        )

        assert isinstance(lp_account, LpAccountV2_1)
        (_, _, args), = fake_chain.calls_to("get_lp_account_address")
        assert args[0]["type"] == "slice"


class TestLpAccountV2_1:
    def test_refund_body(self):
        body = LpAccountV2_1(LP_ACCOUNT).create_refund_body()
        assert body.hash == boc_cell("te6cckEBAQEADwAAGRMrmiwAAAAAAAAAACAs58M0").hash

    def test_direct_add_liquidity_body(self):
        body = LpAccountV2_1(LP_ACCOUNT).create_direct_add_liquidity_body(
            user_wallet_address=USER, amount0=1_000_000_000, amount1=2_000_000_000
        )
        assert body.hash == boc_cell(
            "te6cckEBAgEAgQABcQ/4v8YAAAAAAAAAAEO5rKAEdzWUABAQgAIT4l1Sr7A9YcRoZ55nrAePZLMqsg59MaB/+T0AIlnNCAEAhYACE+JdUq+wPWHEaGeeZ6wHj2SzKrIOfTGgf/k9ACJZzRAAQnxLqlX2B6w4jQzzzPWA8eyWZVZBz6Y0D/8noARLOaLnKlNw"
        ).hash

    def test_reset_gas_body(self):
        body = LpAccountV2_1(LP_ACCOUNT).create_reset_gas_body(query_id=12345)
        assert body.hash == boc_cell("te6cckEBAQEADgAAGCnSKTUAAAAAAAAwOXAH6K0=").hash


class TestVaultV2_1:
    def test_withdraw_fee_body(self):
        body = VaultV2_1(VAULT).create_withdraw_fee_body()
        assert body.hash == boc_cell("te6cckEBAQEADgAAGDVLzfQAAAAAAAAAADRql48=").hash

    @pytest.mark.asyncio
    async def test_withdraw_fee_tx_params(self):
        tx = await VaultV2_1(VAULT).get_withdraw_fee_tx_params(query_id=12345)
        assert tx.to == Address(VAULT)
        assert tx.value == 300_000_000
        assert tx.body.hash == boc_cell(
            "te6cckEBAQEADgAAGDVLzfQAAAAAAAAwOcrqiIc="
        ).hash


def _pool_data_stack(*extra):
    return [
        0,
        address_cell(ROUTER),
        1000,
        10,
        20,
        address_cell(OFFER_JETTON),
        address_cell(ASK_JETTON),
        20,
        10,
        address_cell(None),
        0,
        1,
        *extra,
    ]


class TestDexTypes:
    @pytest.mark.parametrize(
        "router_cls, pool_cls, dex_type",
        [
            (CPIRouterV2_1, CPIPoolV2_1, DexType.CPI),
            (StableRouterV2_1, StablePoolV2_1, DexType.STABLE),
            (WCPIRouterV2_1, WCPIPoolV2_1, DexType.WCPI),
            (WStableRouterV2_1, WStablePoolV2_1, DexType.WSTABLE),
        ],
    )
    @pytest.mark.asyncio
    async def test_router_returns_its_curve_pool(
        self, wallets, router_cls, pool_cls, dex_type
    ):
        router = router_cls(ROUTER)
        wallets.on(router.address, "get_pool_address", [address_cell(POOL)])

        pool = await router.get_pool(wallets, token0=OFFER_JETTON, token1=ASK_JETTON)

        assert router.dex_type is dex_type
        assert router.revision is pool.revision
        assert type(pool) is pool_cls
        assert pool.dex_type is dex_type

    def test_curve_routers_share_the_payload_format(self):
        args = _swap_args()
        assert (
            StableRouterV2_1(ROUTER).create_swap_body(**args).hash
            == RouterV2_1(ROUTER).create_swap_body(**args).hash
        )

    @pytest.mark.parametrize(
        "router_cls, swap_gas, swap_forward, ton_forward",
        [
            (CPIRouterV2_1, 300_000_000, 240_000_000, 300_000_000),
            (WCPIRouterV2_1, 319_000_000, 259_000_000, 319_000_000),
            (WStableRouterV2_1, 479_000_000, 419_000_000, 479_000_000),
        ],
    )
    def test_swap_gas(self, router_cls, swap_gas, swap_forward, ton_forward):
        gas = router_cls(ROUTER).gas_constants

        for operation in (
            GasOperation.SWAP_JETTON_TO_JETTON,
            GasOperation.SWAP_JETTON_TO_TON,
        ):
            amounts = gas.get(operation)
            assert (amounts.gas_amount, amounts.forward_gas_amount) == (
                swap_gas,
                swap_forward,
            )
        ton_swap = gas.get(GasOperation.SWAP_TON_TO_JETTON)
        assert ton_swap.forward_gas_amount == ton_forward
        # liquidity gas is not curve specific
        assert gas.get(GasOperation.PROVIDE_LP_JETTON).gas_amount == 300_000_000

    def test_explicit_gas_still_wins_over_curve_defaults(self):
        router = WStableRouterV2_1(ROUTER, gas_constants={"swap_jetton_to_jetton": 1})
        amounts = router.gas_constants.get(GasOperation.SWAP_JETTON_TO_JETTON)
        assert (amounts.gas_amount, amounts.forward_gas_amount) == (1, 419_000_000)

    @pytest.mark.asyncio
    async def test_weighted_swap_uses_curve_gas(self, wallets):
        tx = await WCPIRouterV2_1(ROUTER).get_swap_jetton_to_jetton_tx_params(
            wallets,
            user_wallet_address=USER,
            offer_jetton_address=OFFER_JETTON,
            ask_jetton_address=ASK_JETTON,
            offer_amount=500_000_000,
            min_ask_amount=200_000_000,
            deadline=900,
        )

        assert tx.value == 319_000_000

    @pytest.mark.asyncio
    async def test_constant_product_pool_data(self, fake_chain):
        fake_chain.on(POOL, "get_pool_data", _pool_data_stack())

        data = await WCPIPoolV2_1(POOL).get_pool_data(fake_chain)

        assert type(data) is PoolDataV2
        assert (data.reserve0, data.reserve1) == (10, 20)

    @pytest.mark.asyncio
    async def test_stable_pool_data_reads_amp(self, fake_chain):
        fake_chain.on(POOL, "get_pool_data", _pool_data_stack(200))

        data = await StablePoolV2_1(POOL).get_pool_data(fake_chain)

        assert isinstance(data, StablePoolData)
        assert data.amp == 200
        assert data.total_supply_lp == 1000

    @pytest.mark.asyncio
    async def test_weighted_stable_pool_data(self, fake_chain):
        fake_chain.on(
            POOL,
            "get_pool_data",
            _pool_data_stack(200, 10**18, 5 * 10**17, address_cell(USER)),
        )

        data = await WStablePoolV2_1(POOL).get_pool_data(fake_chain)

        assert isinstance(data, WStablePoolData)
        assert data.amp == 200
        assert data.rate == 10**18
        assert data.w0 == 5 * 10**17
        assert data.rate_setter_address == Address(USER)
        assert data.protocol_fee_address is None

    @pytest.mark.asyncio
    async def test_weighted_stable_pool_without_rate_setter(self, fake_chain):
        fake_chain.on(
            POOL, "get_pool_data", _pool_data_stack(1, 2, 3, address_cell(None))
        )

        data = await WStablePoolV2_1(POOL).get_pool_data(fake_chain)

        assert data.rate_setter_address is None
