import logging

import requests

import config
from errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)


def _error_kind(status_code: int) -> ErrorKind:
    if status_code in (401, 403):
        return ErrorKind.AUTH
    if status_code == 429:
        return ErrorKind.RATE_LIMIT
    if status_code >= 500:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.UNKNOWN


def complete(prompt: str, *, api_key=None, model=None, url=None, timeout=None, session=None) -> str:
    """
    Send one JSON-mode chat completion to Groq and return the raw message content.
    No retries; the reply is not interpreted here.
    """
    api_key = api_key or config.GROQ_API_KEY
    if not api_key:
        raise ServiceError(ErrorKind.AUTH, "GROQ_API_KEY is not configured")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload = {
        "model": model or config.MODEL_NAME,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": config.LLM_TEMPERATURE,
        "response_format": {"type": "json_object"},
    }

    http = session or requests
    try:
        response = http.post(
            url or config.GROQ_API_URL,
            headers=headers,
            json=payload,
            timeout=timeout or config.REQUEST_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Groq request failed: {e}")
        raise ServiceError(ErrorKind.NETWORK, f"Groq request failed: {e}") from e

    if not response.ok:
        kind = _error_kind(response.status_code)
        logger.error(f"Groq API error: status={response.status_code}, kind={kind.value}")
        raise ServiceError(kind, f"Groq API returned HTTP {response.status_code}")

    try:
        content = response.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise ServiceError(ErrorKind.UNKNOWN, f"Unexpected Groq response body: {e}") from e
    if not isinstance(content, str):
        raise ServiceError(ErrorKind.UNKNOWN, "Groq response has no message content")
    return content
