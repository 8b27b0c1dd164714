"""Helpers for turning loosely formatted text back into structured values."""

import json
import re
from typing import Any, Dict

from nestbox.core.exceptions import InvalidJsonError


# greedy on purpose: spans from the first "{" to the last "}" of a line
_OBJECT_PATTERN = re.compile(r"\{.*\}")


def object_from_string(text: str = "", suppress: bool = False) -> Dict[str, Any]:
    """
    Extract the JSON object embedded in ``text``.

    Returns ``{}`` when no ``{...}`` span is present. A span that does not
    parse raises :class:`InvalidJsonError`, or returns ``{}`` when
    ``suppress`` is set.
    """
    match = _OBJECT_PATTERN.search(text or "")
    if not match:
        return {}
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        if suppress:
            return {}
        raise InvalidJsonError(match.group(0)) from exc
