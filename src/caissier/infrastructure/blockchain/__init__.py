"""
Blockchain (ledger) adapters.
"""

from caissier.infrastructure.blockchain.evm_ledger_client import (
    EvmLedgerClient,
    hex_to_int,
)

__all__ = ["EvmLedgerClient", "hex_to_int"]
