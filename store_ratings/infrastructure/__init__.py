"""Infrastructure Layer — storage, crypto and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Library failures (SQLAlchemy, passlib, jose) mapped to core/errors.py types

Design Decisions:
    - Thin wrappers over libraries, configured by constructor arguments from Settings
"""
