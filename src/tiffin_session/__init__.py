"""
tiffin_session

Client-side session and profile-reconciliation core for the tiffin service,
plus a development credential store to run it against.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal to avoid import-time side effects across the codebase.
