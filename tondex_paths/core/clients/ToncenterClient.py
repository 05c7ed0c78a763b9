import base64
import time
from collections.abc import Sequence
from typing import Any

import httpx
from loguru import logger
from pytoniq_core import Address, Cell

from tondex_paths.core.config import get_toncenter_api_key, get_toncenter_url
from tondex_paths.core.constants.base import DEFAULT_HTTP_TIMEOUT
from tondex_paths.core.errors import RemoteCallError
from tondex_paths.core.utils.retry import is_transient_http_error, retry_async
from tondex_paths.core.utils.ton import StackArg, StackEntry

# TVM exit codes 0 and 1 both mean the get-method returned normally
_SUCCESS_EXIT_CODES = (0, 1)

_NAMED_ARG_TYPES = {
    "slice": "tvm.Slice",
    "cell": "tvm.Cell",
    "int": "num",
}


def _encode_cell(cell: Cell) -> str:
    return base64.b64encode(cell.to_boc()).decode()


def _encode_value(tvm_type: str, value: Any) -> list[str]:
    if tvm_type == "num":
        return ["num", hex(int(value))]
    if tvm_type in ("tvm.Slice", "tvm.Cell") and isinstance(value, Cell):
        return [tvm_type, _encode_cell(value)]
    raise ValueError(f"Unsupported get-method argument: {tvm_type}={value!r}")


def encode_stack_arg(arg: StackArg) -> list[str]:
    """Serialise either argument convention into toncenter's ``[type, value]`` pair."""
    if isinstance(arg, dict):
        tvm_type = _NAMED_ARG_TYPES.get(arg.get("type", ""))
        if tvm_type is None:
            raise ValueError(f"Unsupported get-method argument type: {arg!r}")
        value = arg.get("value") if tvm_type == "num" else arg.get("cell")
        return _encode_value(tvm_type, value)
    tvm_type, value = arg
    return _encode_value(tvm_type, value)


def decode_stack_entry(entry: Any) -> StackEntry:
    tvm_type, value = entry
    if tvm_type == "num":
        return int(value, 16)
    if tvm_type in ("cell", "slice", "tvm.Cell", "tvm.Slice"):
        raw = value.get("bytes") if isinstance(value, dict) else value
        return Cell.one_from_boc(base64.b64decode(raw))
    raise ValueError(f"Unsupported stack entry type: {tvm_type}")


class ToncenterClient:
    """``ChainProvider`` backed by the toncenter v2 HTTP API."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        api_key: str | None = None,
        max_retries: int = 3,
    ):
        self.base_url = (base_url or get_toncenter_url()).rstrip("/")
        self.api_key = api_key or get_toncenter_api_key()
        self.max_retries = max_retries
        self.client = httpx.AsyncClient(timeout=httpx.Timeout(DEFAULT_HTTP_TIMEOUT))
        self.headers = {"Content-Type": "application/json"}
        if self.api_key:
            self.headers["X-API-Key"] = self.api_key

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug(f"Making {method} request to {url}")
        start_time = time.time()

        resp = await self.client.request(method, url, headers=self.headers, **kwargs)

        elapsed = time.time() - start_time
        if resp.status_code >= 400:
            logger.warning(
                f"HTTP {resp.status_code} response for {method} {url} after {elapsed:.2f}s"
            )
        else:
            logger.debug(
                f"HTTP {resp.status_code} response for {method} {url} after {elapsed:.2f}s"
            )

        resp.raise_for_status()
        return resp

    def _on_retry(self, attempt: int, exc: Exception, delay_s: float) -> None:
        logger.warning(
            f"toncenter request failed ({exc}); retry {attempt + 1} in {delay_s:.2f}s"
        )

    async def run_get_method(
        self,
        address: Address | str,
        method: str,
        stack: Sequence[StackArg] | None = None,
    ) -> list[StackEntry]:
        address_str = address.to_str() if isinstance(address, Address) else address
        try:
            payload = {
                "address": address_str,
                "method": method,
                "stack": [encode_stack_arg(arg) for arg in stack or []],
            }
        except (TypeError, ValueError) as exc:
            raise RemoteCallError(str(exc), address=address_str, method=method) from exc

        url = f"{self.base_url}/runGetMethod"
        try:
            resp = await retry_async(
                lambda: self._request("POST", url, json=payload),
                max_retries=self.max_retries,
                should_retry=is_transient_http_error,
                on_retry=self._on_retry,
            )
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise RemoteCallError(
                f"{method} on {address_str} failed: {exc}",
                address=address_str,
                method=method,
            ) from exc

        if not data.get("ok", False):
            raise RemoteCallError(
                f"{method} on {address_str} failed: {data.get('error', 'unknown error')}",
                address=address_str,
                method=method,
            )

        result = data.get("result") or {}
        exit_code = int(result.get("exit_code", 0))
        if exit_code not in _SUCCESS_EXIT_CODES:
            raise RemoteCallError(
                f"{method} on {address_str} exited with code {exit_code}",
                address=address_str,
                method=method,
                exit_code=exit_code,
            )

        try:
            return [decode_stack_entry(entry) for entry in result.get("stack", [])]
        except Exception as exc:
            raise RemoteCallError(
                f"{method} on {address_str} returned an unparsable stack: {exc}",
                address=address_str,
                method=method,
            ) from exc
