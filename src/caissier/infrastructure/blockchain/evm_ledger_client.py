"""
Ethereum JSON-RPC ledger client.

Read-only queries against an Ethereum node over HTTP.
"""

import asyncio
import itertools
import time
from typing import Any, Optional

import aiohttp
from eth_utils import to_checksum_address
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from caissier.domain.exceptions.ledger import (
    LedgerNotFoundError,
    LedgerRpcError,
    LedgerUnavailableError,
)
from caissier.domain.services.i_ledger_client import (
    ILedgerClient,
    LedgerReceipt,
    LedgerTransaction,
)
from caissier.infrastructure.monitoring import metrics
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


def hex_to_int(value: Optional[str]) -> Optional[int]:
    """Parse a JSON-RPC hex quantity ("0x1a") into an int."""
    if value is None:
        return None
    return int(value, 16)


class EvmLedgerClient(ILedgerClient):
    """
    Ethereum JSON-RPC client.

    Keeps one pooled aiohttp session. Transport errors are retried with
    exponential backoff and then surface as LedgerUnavailableError;
    JSON-RPC error objects surface immediately as LedgerRpcError.
    """

    def __init__(
        self,
        rpc_url: str,
        total_timeout: float = 15.0,
        connect_timeout: float = 3.0,
        max_retries: int = 3,
    ):
        """
        Initialize ledger client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            total_timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
            max_retries: Attempts for transient failures (1 = no retry)
        """
        self.rpc_url = rpc_url
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self.max_retries = max_retries
        self._session: Optional[aiohttp.ClientSession] = None
        self._closed = False
        self._request_ids = itertools.count(1)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create pooled HTTP session."""
        if self._closed:
            raise RuntimeError("Ledger client is closed")

        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(
                    limit=100,
                    limit_per_host=30,
                    ttl_dns_cache=300,
                ),
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session; further calls raise RuntimeError."""
        self._closed = True
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    # ================================================================
    # Queries
    # ================================================================

    async def get_balance(self, address: str) -> int:
        result = await self._call("eth_getBalance", [address, "latest"])
        return hex_to_int(result)

    async def get_transaction(
        self, tx_hash: str
    ) -> tuple[LedgerTransaction, bool]:
        result = await self._call("eth_getTransactionByHash", [tx_hash])
        if result is None:
            raise LedgerNotFoundError("transaction", tx_hash)

        transaction = self._parse_transaction(result)
        return transaction, transaction.block_number is None

    async def get_receipt(self, tx_hash: str) -> LedgerReceipt:
        result = await self._call("eth_getTransactionReceipt", [tx_hash])
        if result is None:
            raise LedgerNotFoundError("receipt", tx_hash)

        return LedgerReceipt(
            transaction_hash=result["transactionHash"].lower(),
            succeeded=hex_to_int(result.get("status")) == 1,
            block_number=hex_to_int(result["blockNumber"]),
            gas_used=hex_to_int(result["gasUsed"]),
            effective_gas_price=hex_to_int(result.get("effectiveGasPrice")),
        )

    async def get_block_number(self) -> int:
        return hex_to_int(await self._call("eth_blockNumber", []))

    async def estimate_gas(
        self,
        from_address: str,
        to_address: str,
        value: int = 0,
        data: Optional[str] = None,
    ) -> int:
        call: dict[str, Any] = {
            "from": from_address,
            "to": to_address,
            "value": hex(value),
        }
        if data:
            call["data"] = data
        return hex_to_int(await self._call("eth_estimateGas", [call]))

    async def gas_price(self) -> int:
        return hex_to_int(await self._call("eth_gasPrice", []))

    # ================================================================
    # Transport
    # ================================================================

    async def _call(self, method: str, params: list) -> Any:
        """
        Perform a JSON-RPC call with retries.

        Raises:
            LedgerUnavailableError: If all attempts fail at transport level
            LedgerRpcError: If the node returns an error object
        """
        start = time.monotonic()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=1, min=1, max=4),
                retry=retry_if_exception_type(
                    (aiohttp.ClientError, asyncio.TimeoutError)
                ),
                before_sleep=self._log_retry,
                reraise=True,
            ):
                with attempt:
                    result = await self._call_once(method, params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            metrics.ledger_requests_total.labels(
                method=method, outcome="unavailable"
            ).inc()
            logger.error(
                f"Ledger call {method} failed after {self.max_retries} attempts",
                extra={"rpc_method": method, "error": repr(e)},
            )
            raise LedgerUnavailableError(f"{method}: {e!r}")
        except LedgerRpcError:
            metrics.ledger_requests_total.labels(
                method=method, outcome="rpc_error"
            ).inc()
            raise
        finally:
            metrics.ledger_request_duration_seconds.labels(method=method).observe(
                time.monotonic() - start
            )

        metrics.ledger_requests_total.labels(method=method, outcome="ok").inc()
        return result

    async def _call_once(self, method: str, params: list) -> Any:
        """Single JSON-RPC round trip (called by retry logic)."""
        session = await self._get_session()

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }

        async with session.post(self.rpc_url, json=payload) as response:
            response.raise_for_status()
            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                raise aiohttp.ClientPayloadError(f"Invalid RPC response body: {e}")

        if not isinstance(data, dict):
            raise aiohttp.ClientPayloadError(f"Unexpected RPC response: {data!r}")

        error = data.get("error")
        if error:
            raise LedgerRpcError(
                rpc_code=int(error.get("code", -1)),
                rpc_message=str(error.get("message", "")),
            )

        return data.get("result")

    @staticmethod
    def _log_retry(retry_state) -> None:
        logger.warning(
            f"Ledger call failed, retrying (attempt {retry_state.attempt_number})",
            extra={"error": repr(retry_state.outcome.exception())},
        )

    @staticmethod
    def _parse_transaction(result: dict) -> LedgerTransaction:
        recipient = result.get("to")
        return LedgerTransaction(
            hash=result["hash"].lower(),
            sender=to_checksum_address(result["from"]),
            recipient=to_checksum_address(recipient) if recipient else None,
            value=hex_to_int(result["value"]),
            gas=hex_to_int(result["gas"]),
            gas_price=hex_to_int(result.get("gasPrice")),
            nonce=hex_to_int(result["nonce"]),
            block_number=hex_to_int(result.get("blockNumber")),
        )
