import base64
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pytoniq_core import Address, Cell

from tondex_paths.core.constants.base import MAX_COINS


class TxParams(BaseModel):
    """Outbound message handed to a signer: destination, attached nanotons, body."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    to: Address
    value: int = Field(ge=0, le=MAX_COINS)
    body: Cell | None = None

    def as_message(self, *, bounceable: bool = True) -> dict[str, Any]:
        """Render as a wallet-connector message (address, amount, base64 payload)."""
        message: dict[str, Any] = {
            "address": self.to.to_str(is_user_friendly=True, is_bounceable=bounceable),
            "amount": str(self.value),
        }
        if self.body is not None:
            message["payload"] = base64.b64encode(self.body.to_boc()).decode()
        return message
