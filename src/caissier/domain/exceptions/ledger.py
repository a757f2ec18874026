"""
Ledger (blockchain node) exceptions.
"""

from caissier.domain.exceptions.base import CaissierException


class LedgerError(CaissierException):
    """Base exception for ledger queries."""


class LedgerUnavailableError(LedgerError):
    """
    Ledger node could not be reached or timed out.

    Retryable: callers should back off and try again.

    Args:
        reason: Transport failure description
    """

    retryable = True

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Ledger unavailable: {reason}",
            code="LEDGER_UNAVAILABLE",
        )


class LedgerNotFoundError(LedgerError):
    """
    Queried ledger object does not exist.

    Args:
        kind: Object kind ("transaction", "receipt")
        reference: Hash that was queried
    """

    def __init__(self, kind: str, reference: str):
        self.kind = kind
        self.reference = reference
        super().__init__(
            f"{kind.capitalize()} {reference} not found on ledger",
            code="LEDGER_NOT_FOUND",
        )


class LedgerRpcError(LedgerError):
    """
    Node answered with a JSON-RPC error object.

    Args:
        rpc_code: JSON-RPC error code
        rpc_message: JSON-RPC error message
    """

    def __init__(self, rpc_code: int, rpc_message: str):
        self.rpc_code = rpc_code
        self.rpc_message = rpc_message
        super().__init__(
            f"Ledger RPC error {rpc_code}: {rpc_message}",
            code="LEDGER_RPC_ERROR",
        )
