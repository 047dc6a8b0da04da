"""
Auth Service - Web Layer Service for Authentication State.

Sign-in against the external identity provider is not part of this
server, so nothing here sets the session flag; it is only read and cleared.
"""

from flask import session

SESSION_KEY = "authenticated"


def is_authenticated() -> bool:
    return bool(session.get(SESSION_KEY))


def clear_authentication() -> None:
    session.pop(SESSION_KEY, None)
