"""Address canonicalisation and get-method stack decoding."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeAlias

from pytoniq_core import Address, Cell, begin_cell

from tondex_paths.core.constants.base import HOLE_ADDRESS
from tondex_paths.core.errors import InvalidParameterError, RemoteCallError

AddressLike: TypeAlias = Address | str
StackEntry: TypeAlias = int | Cell

_HOLE = Address(HOLE_ADDRESS)


def to_address(value: AddressLike) -> Address:
    """Parse either textual form (or raw ``wc:hex``) into a canonical ``Address``."""
    if isinstance(value, Address):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidParameterError(f"Invalid address: {value!r}")
    try:
        return Address(value.strip())
    except Exception as exc:
        raise InvalidParameterError(f"Invalid address: {value!r}") from exc


def to_optional_address(value: AddressLike | None) -> Address | None:
    return None if value is None else to_address(value)


def is_hole_address(address: Address | None) -> bool:
    return address is not None and address == _HOLE


def same_address(a: AddressLike, b: AddressLike) -> bool:
    return to_address(a) == to_address(b)


def address_slice(value: AddressLike) -> Cell:
    """Wrap an address into a one-field cell, the shape get-methods expect for slice args."""
    return begin_cell().store_address(to_address(value)).end_cell()


class StackReader:
    """Sequential reader over a normalised get-method result stack.

    Providers hand back numbers as ``int`` and cells or slices as ``Cell``; any
    other shape (or running off the end) is reported as ``RemoteCallError``.
    """

    def __init__(
        self,
        stack: Sequence[Any],
        *,
        address: str | None = None,
        method: str | None = None,
    ):
        self._stack = list(stack)
        self._pos = 0
        self._address = address
        self._method = method

    def __len__(self) -> int:
        return len(self._stack) - self._pos

    def _fail(self, message: str) -> RemoteCallError:
        where = f"{self._method or 'get-method'} at index {self._pos}"
        return RemoteCallError(
            f"{where}: {message}", address=self._address, method=self._method
        )

    def _pop(self) -> Any:
        if self._pos >= len(self._stack):
            raise self._fail("stack exhausted")
        entry = self._stack[self._pos]
        self._pos += 1
        return entry

    def read_int(self) -> int:
        entry = self._pop()
        if isinstance(entry, bool) or not isinstance(entry, int):
            raise self._fail(f"expected number, got {type(entry).__name__}")
        return entry

    def read_boolean(self) -> bool:
        return self.read_int() != 0

    def read_cell(self) -> Cell:
        entry = self._pop()
        if not isinstance(entry, Cell):
            raise self._fail(f"expected cell, got {type(entry).__name__}")
        return entry

    def read_address_opt(self) -> Address | None:
        cell = self.read_cell()
        try:
            return cell.begin_parse().load_address()
        except Exception as exc:
            raise self._fail("cell does not hold an address") from exc

    def read_address(self) -> Address:
        address = self.read_address_opt()
        if address is None:
            raise self._fail("expected address, got addr_none")
        return address

    def read_string(self) -> str:
        cell = self.read_cell()
        try:
            return cell.begin_parse().load_snake_string()
        except Exception as exc:
            raise self._fail("cell does not hold a string") from exc


# Get-method argument conventions. v1 DEX contracts are queried with positional
# ``(tvm-type, value)`` pairs, everything newer with ``{"type", "cell"}`` dicts.
PositionalArg: TypeAlias = tuple[str, Cell | int]
NamedArg: TypeAlias = dict[str, Any]
StackArg: TypeAlias = PositionalArg | NamedArg


def positional_slice_arg(value: AddressLike) -> PositionalArg:
    return ("tvm.Slice", address_slice(value))


def named_slice_arg(value: AddressLike) -> NamedArg:
    return {"type": "slice", "cell": address_slice(value)}
