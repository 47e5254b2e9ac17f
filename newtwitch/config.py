"""Configuration helpers for headers and defaults."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .constants import HEADERS_PATH
from .utils import atomic_write_json

DEFAULT_HEADERS = {
    'accept': 'application/json',
    'user-agent': 'newtwitch/0.1.0',
}


def load_headers_config(path: Path = HEADERS_PATH) -> Dict[str, str]:
    """
    Load extra request headers, creating defaults if missing.

    Helix also expects a `Client-Id` header matching the token's application;
    put it in the headers file.
    """
    default_headers = dict(DEFAULT_HEADERS)

    if not path.exists():
        try:
            atomic_write_json(path, default_headers, preserve_permissions=False)
        except OSError:
            return default_headers

    try:
        with open(path, 'r', encoding='utf-8') as handle:
            config = json.load(handle)
    except (OSError, ValueError):
        return default_headers

    if not isinstance(config, dict):
        return default_headers

    headers = default_headers.copy()
    headers.update({str(key): str(value) for key, value in config.items()})
    return headers
