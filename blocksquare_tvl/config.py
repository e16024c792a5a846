from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import yaml
from web3 import Web3

from .exceptions import ConfigurationError

PROTOCOL = "blocksquare"

# Envio GraphQL endpoint indexing Blocksquare PropertyToken contracts
ENDPOINT = "https://indexer.hyperindex.xyz/d32ae7c/v1/graphql"

# Seconds; handed straight to requests
REQUEST_TIMEOUT = 30

# Property valuations are denominated in DAI wei
DAI_DECIMALS = 18

ACTIVE_PROPERTIES_QUERY = """
  query ActivePropertyTokens {
    PropertyToken(
      where: { propertyValuation: { _gt: "0" } }
    ) {
      id
      contractAddress
      countryCode
      name
      symbol
      propertyValuation
    }
  }
"""

CORE_ASSETS_PATH = Path(__file__).resolve().parent / "core_assets.yaml"


def load_core_assets(path: Optional[Path] = None) -> Mapping[str, Mapping[str, str]]:
    """Load the chain -> symbol -> address table and freeze it.

    Addresses are normalised to their EIP-55 checksum form.
    """
    path = Path(path) if path is not None else CORE_ASSETS_PATH
    try:
        with path.open("r") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read core asset table {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Core asset table {path} must map chains to symbols")

    table = {}
    for chain, assets in raw.items():
        if not isinstance(assets, dict):
            raise ConfigurationError(f"Chain '{chain}' in {path} must map symbols to addresses")
        chain_assets = {}
        for symbol, address in assets.items():
            # unquoted 0x... in YAML loads as an int
            if not isinstance(address, str):
                raise ConfigurationError(
                    f"Address for {chain}.{symbol} in {path} must be a quoted string, got {address!r}"
                )
            try:
                chain_assets[symbol] = Web3.to_checksum_address(address)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid address for {chain}.{symbol} in {path}: {address!r}"
                ) from e
        table[chain] = MappingProxyType(chain_assets)
    return MappingProxyType(table)


CORE_ASSETS = load_core_assets()


def core_asset(chain: str, symbol: str, table: Optional[Mapping] = None) -> str:
    table = CORE_ASSETS if table is None else table
    try:
        return table[chain][symbol]
    except KeyError:
        raise ConfigurationError(f"No core asset '{symbol}' configured for chain '{chain}'") from None
