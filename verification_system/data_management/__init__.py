"""Data management package for the verification core.

Storage adapters:
- SessionStore: in-memory verification sessions with retention sweep
"""

from verification_system.data_management.session_store import SessionStore

__all__ = [
    "SessionStore",
]
