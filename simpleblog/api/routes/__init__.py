"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never contain business logic (delegate to gates/services/mapping)
"""
