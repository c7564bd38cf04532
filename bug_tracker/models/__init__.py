"""ORM Models — SQLAlchemy declarative models.

Design Decisions:
    - All models imported here so Base.metadata is complete before
      create_all or Alembic autogenerate runs
"""

from bug_tracker.models.bug import Bug  # noqa: F401
