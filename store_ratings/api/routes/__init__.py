"""Route Modules — one file per role / concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services)
    - Role restrictions declared with require_roles, never by comparing strings

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
