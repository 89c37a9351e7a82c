"""
tiffin_session.credential_store.db.repositories

Repository classes wrapping SQLAlchemy queries.
"""

# Package marker.
