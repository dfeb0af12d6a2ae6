"""
Utilities
"""

from storerate.utils.session_manager import Session, SessionStore

__all__ = ["Session", "SessionStore"]
