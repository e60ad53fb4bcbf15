"""API Layer — FastAPI routes, existence gates, body validation and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every error leaves as {statusCode, message[, errors]}

Design Decisions:
    - Thin routes: gates load, services update, mapping projects
"""
