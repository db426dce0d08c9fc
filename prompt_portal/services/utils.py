import random
import string
import time
from datetime import datetime, timezone

_ID_ALPHABET = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ID_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Generates a compact identifier: base36 milliseconds followed by 11 random base36 characters.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(11))
    return f"{_to_base36(millis)}{suffix}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
