"""
Validation of the completion service reply.

The reply is decoded to a JSON object and handed to ``AnalysisResult``, which
holds the schema: scores outside [0, 100] are clamped and enum values are
matched case-insensitively there. Pydantic reports errors in field order, so
the first error names the first field that does not fit.
"""
import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from errors import ErrorKind, ResultValidationError
from schemas import AnalysisResult

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def _decode(raw_text: str) -> Dict[str, Any]:
    if not isinstance(raw_text, str):
        raise ResultValidationError(ErrorKind.MALFORMED, "reply is not text")

    text = raw_text.strip()
    fenced = _FENCE.match(text)
    if fenced:
        text = fenced.group(1)
    # Drop prose the model put around the object
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        text = text[start:end + 1]

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and over-long integer literals
        logger.warning(f"Analysis reply is not valid JSON: {e}")
        raise ResultValidationError(ErrorKind.MALFORMED, f"reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResultValidationError(ErrorKind.MALFORMED, "reply is not a JSON object")
    return data


def _field_path(loc) -> str:
    # list indices are dropped: ("recommendations", 1) -> "recommendations"
    return ".".join(str(part) for part in loc if isinstance(part, str))


def parse_analysis(raw_text: str) -> AnalysisResult:
    """
    Decode and validate a service reply.

    Raises:
        ResultValidationError: kind MALFORMED when the text is not a JSON object,
            SCHEMA_MISMATCH (with ``field``) for the first field that does not fit.
    """
    data = _decode(raw_text)
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        path = _field_path(first["loc"])
        logger.warning(f"Analysis reply rejected: {path} {first['msg']}")
        raise ResultValidationError(
            ErrorKind.SCHEMA_MISMATCH, f"{path}: {first['msg']}", field=path
        ) from e
