import os
import re
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def get_env(key: str, default=None, required: bool = True):
    """
    Read an environment variable (``.env`` is loaded on import).
    Raises when the variable is required and neither set nor defaulted.
    """
    value = os.getenv(key, default)
    if value is None and required:
        raise ValueError(f"Environment variable '{key}' is missing")
    return value


def parse_port(raw: Optional[str], default: int) -> int:
    """
    Parse a port argument. Anything non-numeric (or missing) falls back
    to ``default``, the same way ``parseInt(x) || default`` would.
    """
    if raw is None:
        return default
    match = re.match(r"\s*([0-9]+)", raw)
    if not match or int(match.group(1)) == 0:
        return default
    return int(match.group(1))
