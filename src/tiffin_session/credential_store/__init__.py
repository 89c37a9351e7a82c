"""
tiffin_session.credential_store

Development credential store.

Responsibilities:
- Stand in for the external credential store the session core talks to:
  `/api/auth/{signup,login,profile}` with bearer tokens.
- Keep the repository self-contained for local runs and end-to-end tests.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Production deployments point `TIFFIN_API_BASE_URL` at the real store instead.
