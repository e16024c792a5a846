"""
Blocksquare TVL adapter exports.

Each PropertyToken carries a `propertyValuation` in DAI wei; TVL is the sum
over all tokens the indexer reports with a positive valuation.
"""

from .aggregator import ethereum_tvl
from .fetcher import fetch_properties

METHODOLOGY = (
    "TVL is calculated by summing the DAI-denominated valuations of all active "
    "Blocksquare property tokens fetched from the Envio GraphQL API."
)

CHAINS = {
    "ethereum": {
        "tvl": ethereum_tvl,
        # used by the snapshot runner, which needs the records as well as the balances
        "fetch": fetch_properties,
        "asset": "DAI",
    },
}
