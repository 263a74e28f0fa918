from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

CUSTOMERS_FILE = Path("data/customers.json")
MAX_NAME_LENGTH = 24

DEFAULT_CUSTOMER_NAMES: tuple[str, ...] = (
    "Alex",
    "Sarah",
    "Mike",
    "Emma",
    "Jake",
    "Lisa",
    "Tom",
    "Maya",
    "Ben",
    "Zoe",
)


def _parse_name(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    name = value.strip()
    if not name or len(name) > MAX_NAME_LENGTH:
        return None
    return name


def load_customer_names(path: Path = CUSTOMERS_FILE) -> List[str]:
    """Load the customer name pool, falling back to the built-in names.

    The file holds either a JSON list of names or an object with a ``names``
    list.  Blank, non-string and overly long names are dropped; duplicates keep
    their first position.
    """
    if not path.exists():
        return list(DEFAULT_CUSTOMER_NAMES)

    try:
        raw = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return list(DEFAULT_CUSTOMER_NAMES)

    if isinstance(raw, dict):
        raw = raw.get("names")
    if not isinstance(raw, list):
        return list(DEFAULT_CUSTOMER_NAMES)

    names = [name for name in (_parse_name(value) for value in raw) if name is not None]
    if not names:
        return list(DEFAULT_CUSTOMER_NAMES)

    return list(dict.fromkeys(names))
