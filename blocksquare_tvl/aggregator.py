import re
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from .config import CORE_ASSETS, core_asset
from .exceptions import ValueParseError
from .fetcher import fetch_properties
from .logging import get_logger
from .models import PropertyRecord

logger = get_logger(__name__)

# ASCII digits only: no sign, whitespace, underscores or exponent
_UINT_RE = re.compile(r"[0-9]+")


def parse_valuation(raw, record_id: Optional[str] = None) -> int:
    if not isinstance(raw, str) or not _UINT_RE.fullmatch(raw):
        raise ValueParseError(
            f"Property {record_id or '(unknown)'} has malformed valuation {raw!r}",
            value=raw,
            record_id=record_id,
        )
    return int(raw)


def sum_valuations(records: Iterable[PropertyRecord]) -> int:
    """Exact sum of all valuations; the first malformed value aborts the sum."""
    total = 0
    n = 0
    for record in records:
        total += parse_valuation(record.valuation, record.id)
        n += 1
    logger.debug("Summed %d valuations", n)
    return total


def tvl_balances(
    records: Iterable[PropertyRecord],
    chain: str = "ethereum",
    symbol: str = "DAI",
    core_assets: Optional[Mapping] = None,
) -> Dict[str, str]:
    """Balances object: reference-asset address -> summed amount in minor units."""
    address = core_asset(chain, symbol, CORE_ASSETS if core_assets is None else core_assets)
    total = sum_valuations(records)
    return {address: str(total)}


def ethereum_tvl(
    fetch: Callable[[], List[PropertyRecord]] = fetch_properties,
    core_assets: Optional[Mapping] = None,
) -> Dict[str, str]:
    """
    TVL on Ethereum for Blocksquare property tokens.

    Each property's valuation is already denominated in DAI, so the result
    is a single DAI entry. Errors from fetch() propagate untouched.
    """
    properties = fetch()
    balances = tvl_balances(properties, chain="ethereum", symbol="DAI", core_assets=core_assets)
    logger.info("ethereum TVL over %d properties: %s", len(properties), balances)
    return balances
