"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from contacts_api.models.contact import Contact  # noqa: F401
