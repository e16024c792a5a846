from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import ResponseFormatError

REQUIRED_KEYS = ("id", "propertyValuation")


@dataclass(frozen=True)
class PropertyRecord:
    id: str
    contract_address: Optional[str]
    country_code: Optional[str]
    name: Optional[str]
    symbol: Optional[str]
    # DAI wei as returned by the indexer; parsed by the aggregator
    valuation: Any

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "PropertyRecord":
        # Indexer keys: id, contractAddress, countryCode, name, symbol, propertyValuation
        if not isinstance(d, dict):
            raise ResponseFormatError(f"PropertyToken entry is not an object: {d!r}")
        missing = [k for k in REQUIRED_KEYS if k not in d]
        if missing:
            raise ResponseFormatError(
                f"PropertyToken {d.get('id', '(unknown)')} missing fields: {', '.join(missing)}"
            )
        return PropertyRecord(
            id=d["id"],
            contract_address=d.get("contractAddress"),
            country_code=d.get("countryCode"),
            name=d.get("name"),
            symbol=d.get("symbol"),
            valuation=d["propertyValuation"],
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "contract_address": self.contract_address,
            "country_code": self.country_code,
            "name": self.name,
            "symbol": self.symbol,
            "valuation_raw": self.valuation,
        }
