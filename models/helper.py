import secrets
import string
from typing import Callable

_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str, length: int = 10) -> str:
    """Build an opaque identifier such as `task_k3j9x0q2ma`."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(length))
    return f"{prefix}_{suffix}"


def id_generator(prefix: str, length: int = 10) -> Callable[[], str]:
    """Return a default_factory producing prefixed random ids."""
    def _generate() -> str:
        return generate_id(prefix, length)
    return _generate
