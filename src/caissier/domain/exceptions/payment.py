"""
Payment reconciliation exceptions.
"""

from caissier.domain.exceptions.base import CaissierException


class ClaimMismatchError(CaissierException):
    """
    On-chain transaction does not match the payment claim.

    Terminal: resubmitting the same claim cannot succeed.

    Args:
        field: Claim field that disagrees with the ledger
        expected: Value from the claim
        actual: Value observed on the ledger
    """

    def __init__(
        self,
        field: str,
        expected: str,
        actual: str,
        code: str = "CLAIM_MISMATCH",
    ):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Transaction {field} mismatch: claimed {expected}, ledger has {actual}",
            code=code,
        )


class TransactionNotFromOwnedWalletError(ClaimMismatchError):
    """
    Transaction sender is not one of the owner's bound wallets.

    Args:
        sender: Sender address reported by the ledger
    """

    def __init__(self, sender: str):
        self.sender = sender
        super().__init__(
            field="from",
            expected="a wallet bound to this account",
            actual=sender,
            code="TRANSACTION_NOT_FROM_OWNED_WALLET",
        )


class InvalidStatusTransitionError(CaissierException):
    """
    Payment status transition is not allowed.

    Args:
        current: Current status value
        target: Requested status value
    """

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move payment from {current} to {target}",
            code="INVALID_STATUS_TRANSITION",
        )
