"""Identity codec: ``/person/<person_id>``."""

from __future__ import annotations

from .errors import MalformedIdentityError

KIND = "person"


def encode(person_id: str) -> str:
    """Return the stable identity for a person record."""
    return f"/{KIND}/{person_id}"


def decode(identity: str) -> str:
    """Return the person_id encoded in an identity string.

    Raises MalformedIdentityError unless the string splits into exactly
    ``["", "person", <non-empty key>]``.
    """
    parts = identity.split("/")
    if len(parts) != 3 or parts[0] != "" or parts[1] != KIND or not parts[2]:
        raise MalformedIdentityError(identity)
    return parts[2]
