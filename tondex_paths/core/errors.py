from __future__ import annotations

from typing import Any


class TonDexError(Exception):
    """Base class for every error raised by tondex_paths."""


class UnknownRevisionError(TonDexError, KeyError):
    def __init__(self, revision: Any):
        self.revision = revision
        super().__init__(f"Unknown DEX revision: {revision!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class UnmatchedRevisionError(TonDexError):
    def __init__(self, *, expected: str, received: str):
        self.expected = expected
        self.received = received
        super().__init__(
            f"The revision of the provided pTON ({received}) does not match "
            f"the expected revision ({expected})"
        )


class InvalidParameterError(TonDexError, ValueError):
    pass


class RemoteCallError(TonDexError):
    """A get-method call failed in transport or returned an unusable stack."""

    def __init__(
        self,
        message: str,
        *,
        address: str | None = None,
        method: str | None = None,
        exit_code: int | None = None,
    ):
        self.address = address
        self.method = method
        self.exit_code = exit_code
        super().__init__(message)
