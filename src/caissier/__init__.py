"""
Caissier - wallet binding and on-chain payment reconciliation.
"""

__version__ = "0.1.0"
