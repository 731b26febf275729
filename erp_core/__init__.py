"""
ERP Order Core

Domain layer for orders, customers, addresses and the product catalog:
entity invariants, the order status state machine, the money calculation
engine and the customer credit ledger.
"""

__version__ = "0.1.0"
