"""Encoding helpers for the opaque ``data`` payload of a notification."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


def encode_payload(data: Mapping[str, Any] | None) -> str | None:
    """Return the text blob stored for ``data`` (``None`` when empty)."""

    if not data:
        return None
    return json.dumps(dict(data), ensure_ascii=False)


def decode_payload(raw: str | bytes | Mapping[str, Any] | None) -> dict[str, Any]:
    """Best-effort decoding of a stored payload.

    Absent, malformed or non-object payloads decode to an empty mapping.
    """

    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("Discarding malformed notification payload: %r", raw)
        return {}
    if not isinstance(decoded, dict):
        logger.debug("Discarding non-object notification payload: %r", raw)
        return {}
    return decoded


__all__ = ["decode_payload", "encode_payload"]
