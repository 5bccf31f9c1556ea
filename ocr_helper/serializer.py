"""JSON encoding of recognized regions."""
from __future__ import annotations

from dataclasses import asdict
from typing import Iterable

import json

from .errors import SerializationError
from .geometry import RecognizedTextRegion

EMPTY_RESULT = "[]"


def dumps_regions(regions: Iterable[RecognizedTextRegion]) -> str:
    """Encode regions as a single-line JSON array, keys in field order."""
    try:
        payload = [asdict(region) for region in regions]
        return json.dumps(payload, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc
