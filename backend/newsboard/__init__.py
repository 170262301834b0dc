"""Newsboard Application Package — users, articles, comments and votes.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
