"""
Credential verification for admin logins.

``AuthService`` never compares passwords itself; it asks a
``CredentialVerifier`` whether a supplied password matches the stored
value.  The default ``PlainTextVerifier`` matches the current storage
format (passwords are stored as given).  A salted‑hash verifier can be
passed to ``AuthService`` instead without changing the service.
"""

import hmac
from typing import Optional, Protocol


class CredentialVerifier(Protocol):
    """Decides whether a supplied secret matches the stored one."""

    def verify(self, stored: str, supplied: str) -> bool:
        ...


class PlainTextVerifier:
    """Exact equality check between the stored and supplied password.

    Uses ``hmac.compare_digest`` so the comparison time does not depend
    on how many leading characters match.
    """

    def verify(self, stored: Optional[str], supplied: Optional[str]) -> bool:
        if stored is None or supplied is None:
            return False
        return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


default_verifier = PlainTextVerifier()
