"""API Schemas — Pydantic request/response models for the HTTP boundary.

Invariants:
    - Request models check JSON shape and types; field policies (name length,
      password strength) live in core/validate_credentials.py
    - Field aliases match the JSON names existing clients send (camelCase where they do)

Design Decisions:
    - One module per route group
"""
