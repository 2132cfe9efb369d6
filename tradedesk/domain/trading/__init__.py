"""
Trading bounded context: domain layer.

This module contains all domain logic for the trading context:
- Accounts and wallet balances
- Product catalog
- Purchase ledger
- Portfolio aggregation and watchlists
"""
