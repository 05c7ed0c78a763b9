from __future__ import annotations

from typing import Any

from pytoniq_core import Address

from tondex_paths.core.adapters.BaseAdapter import BaseAdapter, require_sender
from tondex_paths.core.adapters.decorators import status_tuple
from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider, Sender
from tondex_paths.core.constants.base import ADAPTER_STONFI
from tondex_paths.core.constants.stonfi import DexType
from tondex_paths.core.errors import InvalidParameterError
from tondex_paths.core.utils.ton import AddressLike

from .dispatcher import contracts_for, dex_factory, pton_for, router_for
from .pton import PtonV1, PtonV2
from .revisions import DexRevision, resolve_revision
from .types import LpAccountData, PoolDataV1, PoolDataV2, RouterData, RouterVersion
from .v1.router import RouterV1
from .v2.router import RouterV2

# accepted in place of a jetton minter address to mean native TON
NATIVE_TON = "TON"


def _is_native(token: AddressLike) -> bool:
    return isinstance(token, str) and token.upper() == NATIVE_TON


class StonfiAdapter(BaseAdapter):
    """Facade over one router revision.

    Reads go through ``provider``; transactions are assembled here and handed to
    ``sender`` for signing and broadcast. Public methods return
    ``(ok, result_or_error)``.
    """

    adapter_type = ADAPTER_STONFI

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        provider: ChainProvider | None = None,
        sender: Sender | None = None,
        revision: DexRevision | str | None = None,
        router_address: AddressLike | None = None,
        pton_address: AddressLike | None = None,
        dex_type: DexType | str | None = None,
        **kwargs: Any,
    ) -> None:
        stonfi_cfg = (config or {}).get("stonfi_adapter", {})
        # wrappers first: a bad revision or address must not leave a client open
        revision = resolve_revision(
            revision or stonfi_cfg.get("revision") or DexRevision.V1
        )
        router = router_for(
            revision,
            router_address or stonfi_cfg.get("router_address"),
            dex_type=dex_type or stonfi_cfg.get("dex_type"),
        )
        proxy_ton = pton_for(
            revision, pton_address or stonfi_cfg.get("pton_address")
        )

        super().__init__("stonfi_adapter", config, provider=provider, sender=sender)
        self.revision = revision
        self.router: RouterV1 | RouterV2 = router
        self.proxy_ton: PtonV1 | PtonV2 = proxy_ton
        self.logger = self.logger.bind(revision=str(self.revision))

    @status_tuple
    async def detect_revision(self, router_address: AddressLike) -> DexRevision:
        """Ask a v2+ router for its version and map it to a revision."""
        version = await RouterV2(router_address).get_router_version(self.provider)
        contracts = dex_factory(version.major, version.minor)
        return contracts.router.revision

    @status_tuple
    async def get_router_version(self) -> RouterVersion:
        if not isinstance(self.router, RouterV2):
            raise InvalidParameterError("v1 routers do not report a version")
        return await self.router.get_router_version(self.provider)

    @status_tuple
    async def get_router_data(self) -> RouterData:
        return await self.router.get_router_data(self.provider)

    @status_tuple
    async def get_pool_address(
        self, token0: AddressLike, token1: AddressLike
    ) -> Address | None:
        return await self.router.get_pool_address_by_jetton_minters(
            self.provider,
            token0=self._token_minter(token0),
            token1=self._token_minter(token1),
        )

    @status_tuple
    async def get_pool_data(
        self, token0: AddressLike, token1: AddressLike
    ) -> PoolDataV1 | PoolDataV2 | None:
        pool = await self.router.get_pool(
            self.provider,
            token0=self._token_minter(token0),
            token1=self._token_minter(token1),
        )
        if pool is None:
            return None
        return await pool.get_pool_data(self.provider)

    @status_tuple
    async def get_lp_account_data(
        self, pool_address: AddressLike, owner_address: AddressLike
    ) -> LpAccountData | None:
        pool = contracts_for(self.revision).pool(pool_address)
        lp_account = await pool.get_lp_account(
            self.provider, owner_address=owner_address
        )
        if lp_account is None:
            return None
        return await lp_account.get_lp_account_data(self.provider)

    @status_tuple
    async def build_swap_tx(
        self,
        *,
        user_wallet_address: AddressLike,
        offer: AddressLike,
        ask: AddressLike,
        offer_amount: int,
        min_ask_amount: int,
        **options: Any,
    ) -> TxParams:
        """Swap ``offer`` for ``ask``; either side may be ``"TON"``.

        ``options`` are passed to the router method (referral, gas overrides,
        revision-specific payload fields).
        """
        if _is_native(offer) and _is_native(ask):
            raise InvalidParameterError("Cannot swap TON for TON")
        if _is_native(offer):
            return await self.router.get_swap_ton_to_jetton_tx_params(
                self.provider,
                user_wallet_address=user_wallet_address,
                proxy_ton=self.proxy_ton,
                ask_jetton_address=ask,
                offer_amount=offer_amount,
                min_ask_amount=min_ask_amount,
                **options,
            )
        if _is_native(ask):
            return await self.router.get_swap_jetton_to_ton_tx_params(
                self.provider,
                user_wallet_address=user_wallet_address,
                offer_jetton_address=offer,
                proxy_ton=self.proxy_ton,
                offer_amount=offer_amount,
                min_ask_amount=min_ask_amount,
                **options,
            )
        return await self.router.get_swap_jetton_to_jetton_tx_params(
            self.provider,
            user_wallet_address=user_wallet_address,
            offer_jetton_address=offer,
            ask_jetton_address=ask,
            offer_amount=offer_amount,
            min_ask_amount=min_ask_amount,
            **options,
        )

    @status_tuple
    async def build_provide_liquidity_tx(
        self,
        *,
        user_wallet_address: AddressLike,
        send_token: AddressLike,
        other_token: AddressLike,
        send_amount: int,
        min_lp_out: int,
        single_side: bool = False,
        **options: Any,
    ) -> TxParams:
        if _is_native(other_token):
            # the router pairs against the proxy's jetton
            other_token = self.proxy_ton.address
        if single_side and not isinstance(self.router, RouterV2):
            raise InvalidParameterError(
                "Single-side liquidity is not available in revision v1"
            )

        if _is_native(send_token):
            method = (
                self.router.get_single_side_provide_liquidity_ton_tx_params
                if single_side
                else self.router.get_provide_liquidity_ton_tx_params
            )
            return await method(
                self.provider,
                user_wallet_address=user_wallet_address,
                proxy_ton=self.proxy_ton,
                other_token_address=other_token,
                send_amount=send_amount,
                min_lp_out=min_lp_out,
                **options,
            )

        method = (
            self.router.get_single_side_provide_liquidity_jetton_tx_params
            if single_side
            else self.router.get_provide_liquidity_jetton_tx_params
        )
        return await method(
            self.provider,
            user_wallet_address=user_wallet_address,
            send_token_address=send_token,
            other_token_address=other_token,
            send_amount=send_amount,
            min_lp_out=min_lp_out,
            **options,
        )

    @require_sender
    @status_tuple
    async def send(self, tx_params: TxParams) -> Any:
        """Hand assembled params to the configured sender."""
        self.logger.info(
            f"Sending {tx_params.value} nanoton to {tx_params.to.to_str()}"
        )
        return await self.sender.send(tx_params)

    def _token_minter(self, token: AddressLike) -> AddressLike:
        return self.proxy_ton.address if _is_native(token) else token
