"""Services Layer — async orchestration around the pure core.

Invariants:
    - Services read through repository protocols, call core functions, write back
    - No FastAPI or SQLAlchemy imports here; routes and db/ supply both

Design Decisions:
    - One small class per use case (login, account administration, schedule reads)
"""
