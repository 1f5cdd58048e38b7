"""Fingerprints for persisted bot state."""

import hashlib
import json
from typing import Any


def hash_state(data: dict[str, Any]) -> str:
    """MD5 hex digest of ``data`` as canonical JSON.

    Key order does not matter, and values JSON can't encode (dates, enums)
    are hashed by their ``str``. ``BotState`` compares digests taken at
    load and at save to skip writes for turns that changed nothing.
    """
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()
