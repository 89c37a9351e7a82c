"""
tiffin_session.session

Client-side session core.

Responsibilities:
- Session state and the controller state machine.
- Profile reconciliation, role-aware navigation and local validation.
- The consumer-facing handle and context lifecycle.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# View code should depend on `session.context.SessionHandle` only.
