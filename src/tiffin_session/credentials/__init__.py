"""
tiffin_session.credentials

Credential-store boundary package.

Responsibilities:
- HTTP client for the credential store's `/auth` endpoints.
- Bearer-token persistence.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The session controller is the only writer of the stored token.
