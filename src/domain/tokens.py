"""Opaque single-use token generation."""

import uuid


def new_opaque_token() -> str:
    """
    Generate an email verification token.

    A random (version 4) UUID carries 122 bits of entropy, enough that
    collisions are treated as impossible rather than checked for.
    """
    return str(uuid.uuid4())
