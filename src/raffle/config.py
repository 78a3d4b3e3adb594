"""Application settings read from the environment.

Protean's own configuration (databases, brokers, event store) lives in
``domain.toml`` next to ``domain.py``; these are the raffle-specific knobs.
"""

import os


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


# Orders shipped outside this country are international
HOME_COUNTRY = os.getenv("RAFFLE_HOME_COUNTRY", "US")

# Lower bound for a cart line quantity; lines leave the cart only by explicit removal
CART_MIN_QUANTITY = _int_env("RAFFLE_CART_MIN_QUANTITY", 1)

MAX_UPLOAD_BYTES = _int_env("RAFFLE_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)

STORAGE_ROOT = os.getenv("RAFFLE_STORAGE_ROOT", "storage")
PUBLIC_URL_BASE = os.getenv("RAFFLE_PUBLIC_URL_BASE", "http://localhost:8000/storage")

ITEM_IMAGE_BUCKET = "raffle-items"
EVENT_HEADER_BUCKET = "event-headers"


def admin_tokens() -> dict[str, str]:
    """Parse ``RAFFLE_ADMIN_TOKENS`` (``token:user_id,token:user_id``) into a mapping."""
    raw = os.getenv("RAFFLE_ADMIN_TOKENS", "")
    tokens = {}
    for pair in raw.split(","):
        if ":" not in pair:
            continue
        token, user_id = pair.split(":", 1)
        if token.strip() and user_id.strip():
            tokens[token.strip()] = user_id.strip()
    return tokens
