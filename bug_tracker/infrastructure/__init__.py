"""Infrastructure — database sessions, SQL storage and logging setup.

Invariants:
    - Only this layer (and db/, models/) imports SQLAlchemy
"""
