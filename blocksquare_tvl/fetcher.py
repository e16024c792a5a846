"""
Blocksquare property-token fetcher.

Data source: Envio GraphQL indexer.
- One POST per call carrying ACTIVE_PROPERTIES_QUERY
- Response shape: {"data": {"PropertyToken": [ {...}, ... ]}}
- Any transport, status or shape problem aborts the whole fetch
"""

from typing import List, Optional

import requests

from .config import ACTIVE_PROPERTIES_QUERY, ENDPOINT, REQUEST_TIMEOUT
from .exceptions import ResponseFormatError, TransportError
from .logging import get_logger
from .models import PropertyRecord

logger = get_logger(__name__)


def _post_query(endpoint: str, timeout: float, session: Optional[requests.Session]):
    payload = {"query": ACTIVE_PROPERTIES_QUERY}
    headers = {"Content-Type": "application/json"}
    post = session.post if session is not None else requests.post

    try:
        resp = post(endpoint, json=payload, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Indexer request to %s failed: %s", endpoint, e)
        raise TransportError(f"Request to {endpoint} failed: {e}") from e

    try:
        resp.raise_for_status()
    except requests.HTTPError as e:
        logger.warning("Indexer returned HTTP %s", resp.status_code)
        raise TransportError(
            f"Indexer returned HTTP {resp.status_code}: {resp.text[:200]}",
            status_code=resp.status_code,
        ) from e

    try:
        return resp.json()
    except ValueError as e:
        raise ResponseFormatError(
            f"Non-JSON response from indexer: status={resp.status_code}, text={resp.text[:200]}"
        ) from e


def fetch_properties(
    endpoint: str = ENDPOINT,
    timeout: float = REQUEST_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[PropertyRecord]:
    """
    Fetch all active property tokens from the indexer.

    Args:
        endpoint: GraphQL URL
        timeout: requests timeout in seconds
        session: optional requests.Session to send through

    Returns:
        PropertyRecord list in the order the indexer returned them.

    Raises:
        TransportError: network failure or non-2xx status
        ResponseFormatError: body is not JSON or lacks data.PropertyToken
    """
    data = _post_query(endpoint, timeout, session)

    if not isinstance(data, dict):
        raise ResponseFormatError(f"Unexpected top-level response: {data!r}")

    errors = data.get("errors")
    if errors:
        if not isinstance(errors, list):
            raise ResponseFormatError(f"Malformed GraphQL errors from indexer: {errors!r}")
        first = errors[0]
        message = first.get("message") if isinstance(first, dict) else first
        raise ResponseFormatError(f"GraphQL error from indexer: {message}")

    result = data.get("data")
    if not isinstance(result, dict) or "PropertyToken" not in result:
        raise ResponseFormatError(f"Response missing data.PropertyToken: {str(data)[:200]}")

    tokens = result["PropertyToken"]
    if not isinstance(tokens, list):
        raise ResponseFormatError(f"data.PropertyToken is not a list: {tokens!r}")

    records = [PropertyRecord.from_dict(t) for t in tokens]
    logger.info("Fetched %d property tokens from %s", len(records), endpoint)
    return records
