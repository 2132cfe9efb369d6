"""
TradeDesk: trading demo backend.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - trading: Accounts, product catalog, purchases, portfolio, watchlist.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (database, hashing, tokens) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
