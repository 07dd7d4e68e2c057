"""Shared utilities: datetime and generators."""

from officeauth.shared.utils.datetime import ensure_utc, utc_now
from officeauth.shared.utils.generators import (
    generate_cuid,
    generate_token,
    is_well_formed_token,
)

__all__ = [
    "generate_cuid",
    "generate_token",
    "is_well_formed_token",
    "utc_now",
    "ensure_utc",
]
