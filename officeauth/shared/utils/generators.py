"""ID and value generators (CUID for row ids, hex for opaque tokens)."""

import re
import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# 32 random bytes rendered as hex; matches the 64-char token column.
TOKEN_BYTES = 32
_TOKEN_RE = re.compile(r"^[0-9a-f]{%d}$" % (TOKEN_BYTES * 2))


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_token() -> str:
    """Return a new opaque token (64 lowercase hex chars, 256 bits of entropy)."""
    return secrets.token_hex(TOKEN_BYTES)


def is_well_formed_token(value: str) -> bool:
    """Return True if value has the shape of a token produced by generate_token()."""
    return isinstance(value, str) and bool(_TOKEN_RE.fullmatch(value))
