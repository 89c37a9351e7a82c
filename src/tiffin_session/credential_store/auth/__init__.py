"""
tiffin_session.credential_store.auth

Token and password helpers for the development credential store.

Responsibilities:
- JWT issuing and validation.
- Password hashing.
- FastAPI dependency resolving the bearer token into a user record.
"""

# Package marker.
