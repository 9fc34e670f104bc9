"""Scrub sensitive data from resources before they are archived."""

from __future__ import annotations

import re
from typing import Any, Iterable

REDACTED_VALUE = "<redacted>"

# Substrings of env var names whose values are never archived
SENSITIVE_ENV_MARKERS = (
    "PASSWORD",
    "PASSWD",
    "SECRET",
    "TOKEN",
    "KEY",
    "CREDENTIAL",
    "PROXY",
    "AUTH",
)

_URL_CHARS = re.compile(r"[^.\-/:]")


def anonymize_url(raw: str | None) -> str:
    """Mask every URL character except separators, so only the URL's shape survives.

    ``https://secret.example.com/x`` becomes ``xxxxx://xxxxxx.xxxxxxx.xxx/x``.
    Applying it twice gives the same result, and any string is accepted.
    """
    if not raw:
        return ""
    return _URL_CHARS.sub("x", raw)


def is_sensitive_env_name(name: str | None) -> bool:
    if not name:
        return False
    upper = name.upper()
    return any(marker in upper for marker in SENSITIVE_ENV_MARKERS)


def redact_env_vars(containers: Iterable[Any] | None) -> list[Any]:
    """Replace values of sensitive env entries with a placeholder, in place.

    Works on V1Container objects. Entries using ``value_from`` carry a reference
    rather than a value and are left alone.
    """
    result = list(containers or [])
    for container in result:
        for env in getattr(container, "env", None) or []:
            if is_sensitive_env_name(env.name) and env.value:
                env.value = REDACTED_VALUE
    return result
