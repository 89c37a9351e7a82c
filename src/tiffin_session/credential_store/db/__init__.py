"""
tiffin_session.credential_store.db

Persistence layer for the development credential store.

Responsibilities:
- Declarative base, ORM models, engine/session helpers and repositories.
"""

# Package marker.
