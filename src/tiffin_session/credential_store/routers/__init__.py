"""
tiffin_session.credential_store.routers

HTTP routers of the development credential store.
"""

# Package marker.
