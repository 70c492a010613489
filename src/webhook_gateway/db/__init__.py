"""
webhook_gateway.db

Relational persistence for the SQL registry backend.

Responsibilities:
- SQLAlchemy base, ORM model, engine/session helpers.
"""

# Package marker.
