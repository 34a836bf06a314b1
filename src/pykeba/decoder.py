"""Decode raw wallbox replies into report models."""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from pydantic import ValidationError

from .exceptions import DecodeError
from .models import WallboxReport

_LOGGER = logging.getLogger(__name__)

ReportT = TypeVar("ReportT", bound=WallboxReport)


def decode(raw: bytes | str, schema: type[ReportT]) -> ReportT:
    """Decode a reply payload into the given report schema.

    Args:
        raw: Reply datagram as received from the wallbox
        schema: Report model to decode into (e.g. ``LiveSession``)

    Returns:
        Validated report instance

    Raises:
        DecodeError: If the payload is not a JSON object or a field has an
            incompatible type
    """
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        raise DecodeError(f"Malformed {schema.__name__} reply: {err}", raw) from err

    if not isinstance(payload, dict):
        raise DecodeError(
            f"Malformed {schema.__name__} reply: expected a JSON object, "
            f"got {type(payload).__name__}",
            raw,
        )

    try:
        return schema.model_validate(payload)
    except ValidationError as err:
        _LOGGER.debug("Rejected %s payload %r: %s", schema.__name__, raw, err)
        raise DecodeError(
            f"Invalid {schema.__name__} reply ({err.error_count()} errors): {err}",
            raw,
        ) from err


__all__ = ["decode"]
