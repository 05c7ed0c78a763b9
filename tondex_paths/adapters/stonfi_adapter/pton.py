"""Proxy TON: the jetton minter that lets the DEX treat native TON as a jetton."""

from __future__ import annotations

from pytoniq_core import Address, Cell, begin_cell

from tondex_paths.core.adapters.models import TxParams
from tondex_paths.core.clients.protocols import ChainProvider
from tondex_paths.core.constants.stonfi import PTON_V1_ADDRESS, PtonOpV1, PtonOpV2
from tondex_paths.core.utils.jetton import JettonMinter, create_jetton_transfer_message
from tondex_paths.core.utils.ton import AddressLike, to_address
from tondex_paths.core.utils.units import to_coins

from .contract import DexContract, GasOverrides, query_id_or_default
from .gas import GasOperation, ton_native_value
from .revisions import DexRevision


class PtonV1(DexContract):
    revision = DexRevision.V1
    role = "pton"

    def __init__(
        self,
        address: AddressLike = PTON_V1_ADDRESS,
        *,
        gas_constants: GasOverrides = None,
    ):
        super().__init__(address, gas_constants=gas_constants)

    async def get_wallet_address(
        self, provider: ChainProvider, owner: AddressLike
    ) -> Address:
        return await JettonMinter(self.address).get_wallet_address(provider, owner)

    def create_ton_transfer_body(
        self,
        *,
        ton_amount: int,
        destination_address: AddressLike,
        forward_ton_amount: int = 0,
        forward_payload: Cell | None = None,
        query_id: int | None = None,
    ) -> Cell:
        # v1 proxy wallets take a plain jetton transfer with no response destination
        return create_jetton_transfer_message(
            query_id=query_id_or_default(query_id),
            amount=ton_amount,
            destination=destination_address,
            forward_ton_amount=forward_ton_amount,
            forward_payload=forward_payload,
        )

    async def get_ton_transfer_tx_params(
        self,
        provider: ChainProvider,
        *,
        ton_amount: int,
        destination_address: AddressLike,
        refund_address: AddressLike,
        forward_payload: Cell | None = None,
        forward_ton_amount: int = 0,
        query_id: int | None = None,
        destination_wallet_address: AddressLike | None = None,
    ) -> TxParams:
        """``refund_address`` is accepted for parity with later proxies; v1 has no field for it."""
        to = (
            to_address(destination_wallet_address)
            if destination_wallet_address is not None
            else await self.get_wallet_address(provider, destination_address)
        )
        body = self.create_ton_transfer_body(
            ton_amount=ton_amount,
            destination_address=destination_address,
            forward_ton_amount=forward_ton_amount,
            forward_payload=forward_payload,
            query_id=query_id,
        )
        value = ton_native_value(
            ton_amount,
            forward_ton_amount,
            self.gas_constants.get(GasOperation.TON_TRANSFER).require_gas_amount(),
        )
        return TxParams(to=to, value=value, body=body)

    def create_deploy_wallet_body(
        self, *, owner_address: AddressLike, query_id: int | None = None
    ) -> Cell:
        return (
            begin_cell()
            .store_uint(PtonOpV1.DEPLOY_WALLET, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_address(to_address(owner_address))
            .end_cell()
        )

    async def get_deploy_wallet_tx_params(
        self,
        *,
        owner_address: AddressLike,
        gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.DEPLOY_WALLET, gas_amount=gas_amount
        )
        body = self.create_deploy_wallet_body(
            owner_address=owner_address, query_id=query_id
        )
        return TxParams(to=self.address, value=gas.require_gas_amount(), body=body)


class PtonV2(DexContract):
    revision = DexRevision.V2
    role = "pton"

    async def get_wallet_address(
        self, provider: ChainProvider, owner: AddressLike
    ) -> Address:
        return await JettonMinter(self.address).get_wallet_address(provider, owner)

    def create_ton_transfer_body(
        self,
        *,
        ton_amount: int,
        refund_address: AddressLike,
        forward_payload: Cell | None = None,
        query_id: int | None = None,
    ) -> Cell:
        builder = (
            begin_cell()
            .store_uint(PtonOpV2.TON_TRANSFER, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_coins(to_coins(ton_amount))
            .store_address(to_address(refund_address))
        )
        # the presence bit is written only together with the payload ref
        if forward_payload is not None:
            builder.store_uint(1, 1).store_ref(forward_payload)
        return builder.end_cell()

    async def get_ton_transfer_tx_params(
        self,
        provider: ChainProvider,
        *,
        ton_amount: int,
        destination_address: AddressLike,
        refund_address: AddressLike,
        forward_payload: Cell | None = None,
        forward_ton_amount: int = 0,
        query_id: int | None = None,
        destination_wallet_address: AddressLike | None = None,
    ) -> TxParams:
        to = (
            to_address(destination_wallet_address)
            if destination_wallet_address is not None
            else await self.get_wallet_address(provider, destination_address)
        )
        body = self.create_ton_transfer_body(
            ton_amount=ton_amount,
            refund_address=refund_address,
            forward_payload=forward_payload,
            query_id=query_id,
        )
        value = ton_native_value(
            ton_amount,
            forward_ton_amount,
            self.gas_constants.get(GasOperation.TON_TRANSFER).require_gas_amount(),
        )
        return TxParams(to=to, value=value, body=body)

    def create_deploy_wallet_body(
        self,
        *,
        owner_address: AddressLike,
        excess_address: AddressLike,
        query_id: int | None = None,
    ) -> Cell:
        return (
            begin_cell()
            .store_uint(PtonOpV2.DEPLOY_WALLET, 32)
            .store_uint(query_id_or_default(query_id), 64)
            .store_address(to_address(owner_address))
            .store_address(to_address(excess_address))
            .end_cell()
        )

    async def get_deploy_wallet_tx_params(
        self,
        *,
        owner_address: AddressLike,
        excess_address: AddressLike,
        gas_amount: int | None = None,
        query_id: int | None = None,
    ) -> TxParams:
        gas = self.gas_constants.resolve(
            GasOperation.DEPLOY_WALLET, gas_amount=gas_amount
        )
        body = self.create_deploy_wallet_body(
            owner_address=owner_address,
            excess_address=excess_address,
            query_id=query_id,
        )
        return TxParams(to=self.address, value=gas.require_gas_amount(), body=body)


class PtonV2_1(PtonV2):  # noqa: N801
    """Same wire format as the v2 proxy; paired with v2.1 routers."""

    revision = DexRevision.V2_1


Pton: TypeAlias = PtonV1 | PtonV2
