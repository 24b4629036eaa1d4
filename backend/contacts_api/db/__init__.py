"""Database declarations — SQLAlchemy declarative Base."""
