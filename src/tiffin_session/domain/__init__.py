"""
tiffin_session.domain

Domain package.

Responsibilities:
- User data model (tagged role variants) and wire codec.
- Pure derived views over a user (profile completeness).
"""

# Package marker.
