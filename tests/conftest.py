"""Pytest configuration and fixtures."""

import logging
from typing import Any, Callable, Iterator
from unittest.mock import MagicMock

import pytest

from blocksquare_tvl.models import PropertyRecord

DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"


@pytest.fixture
def dai_address() -> str:
    """Checksummed DAI address on Ethereum."""
    return DAI


@pytest.fixture
def property_token() -> dict[str, Any]:
    """PropertyToken entry as the indexer returns it."""
    return {
        "id": "1-0x071e599531F502c071Ba9F18298425178BAE2bd2",
        "contractAddress": "0x071e599531F502c071Ba9F18298425178BAE2bd2",
        "countryCode": "SI",
        "name": "Student house Vrhovci, Ljubljana, Slovenia",
        "symbol": "BSPT-OCN-15",
        "propertyValuation": "764000000000000000000000",
    }


@pytest.fixture
def make_record() -> Callable[..., PropertyRecord]:
    """Build a PropertyRecord with only the valuation varying."""

    def _make(valuation: Any, record_id: str = "1-0xabc") -> PropertyRecord:
        return PropertyRecord(
            id=record_id,
            contract_address=None,
            country_code="SI",
            name="Test property",
            symbol="BSPT-TEST",
            valuation=valuation,
        )

    return _make


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Build a mocked requests.Response."""

    def _make(payload: Any = None, status_code: int = 200, json_error: bool = False) -> MagicMock:
        resp = MagicMock()
        resp.status_code = status_code
        resp.text = "" if payload is None else str(payload)
        if json_error:
            resp.json.side_effect = ValueError("Expecting value")
        else:
            resp.json.return_value = payload
        return resp

    return _make


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo setup_logging() so handlers do not outlive a test's captured stdout."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
