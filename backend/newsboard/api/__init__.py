"""API Layer — FastAPI transport and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - The transport never touches the entity store except through the dispatcher
"""
