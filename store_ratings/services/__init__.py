"""Services Layer — persistence-backed operations over an AsyncSession.

Invariants:
    - One class per concern: credentials, rating ledger, aggregation, store registry
    - Services raise StoreRatingsError subclasses, never HTTPException

Design Decisions:
    - Services receive the session from the caller (FastAPI dependency) and own
      their commit boundaries
"""
