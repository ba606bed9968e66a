"""Database Layer — declarative base and repository implementations.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - ORM rows never leave this package; callers receive core records
"""
