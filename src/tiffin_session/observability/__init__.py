"""
tiffin_session.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for the development credential store.
"""

# Package marker.
