import argparse
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pandas as pd

from .adapter import CHAINS, METHODOLOGY
from .aggregator import tvl_balances
from .config import DAI_DECIMALS, PROTOCOL
from .exceptions import TvlError
from .logging import LOG_FORMATS, setup_logging

ASSETS_FIELDS = [
    "date", "chain", "protocol", "id", "contract_address",
    "country_code", "name", "symbol", "valuation_raw",
]
SUMMARY_FIELDS = ["date", "chain", "protocol", "asset", "amount_raw", "n_properties"]


def _to_units(amount_raw: str) -> Decimal:
    # display only; the raw string is what gets written
    return Decimal(amount_raw).scaleb(-DAI_DECIMALS)


def run_chain(
    chain: str,
    out_root: str = "data/out",
    no_write: bool = False,
    fetch: Optional[Callable] = None,
) -> Dict[str, str]:
    if chain not in CHAINS:
        raise TvlError(f"Unknown chain '{chain}'. Available: {', '.join(CHAINS)}")
    # same fetch and reference asset as the chain's tvl callable; records are kept for the CSVs
    entry = CHAINS[chain]
    fetch = fetch or entry["fetch"]
    date_str = datetime.now(timezone.utc).strftime("%Y-%m-%d")

    records = fetch()
    balances = tvl_balances(records, chain=chain, symbol=entry["asset"])
    asset, amount_raw = next(iter(balances.items()))

    print(f"✅ {chain}: {len(records)} properties | TVL {_to_units(amount_raw):,.2f} {entry['asset']}")

    if no_write:
        return balances

    out_dir = Path(out_root) / "tvl" / f"{PROTOCOL}_{chain}"
    out_dir.mkdir(parents=True, exist_ok=True)
    assets_csv = out_dir / f"tvl_assets_{date_str}.csv"
    summary_csv = out_dir / f"tvl_summary_{date_str}.csv"

    rows = [{"date": date_str, "chain": chain, "protocol": PROTOCOL, **r.to_row()} for r in records]
    # raw wei values exceed int64; keep them as strings
    pd.DataFrame(rows, columns=ASSETS_FIELDS, dtype=str).to_csv(assets_csv, index=False)

    summary_row = {
        "date": date_str,
        "chain": chain,
        "protocol": PROTOCOL,
        "asset": asset,
        "amount_raw": amount_raw,
        "n_properties": str(len(records)),
    }
    pd.DataFrame([summary_row], columns=SUMMARY_FIELDS, dtype=str).to_csv(summary_csv, index=False)

    print(f"💾 Wrote assets → {assets_csv}")
    print(f"💾 Wrote summary → {summary_csv}")
    return balances


def run_snapshot(
    chains: Optional[List[str]] = None,
    out_root: str = "data/out",
    no_write: bool = False,
    fetch: Optional[Callable] = None,
) -> Dict[str, Dict[str, str]]:
    chains = chains or list(CHAINS)
    results = {}
    for chain in chains:
        results[chain] = run_chain(chain, out_root=out_root, no_write=no_write, fetch=fetch)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description=METHODOLOGY)
    p.add_argument("--chain", action="append", choices=sorted(CHAINS), help="Chain to run (repeatable; default all)")
    p.add_argument("--out-root", default="data/out", help="Root directory for output CSVs")
    p.add_argument("--no-write", action="store_true", help="Do not write CSV files; just print")
    p.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ERROR")
    p.add_argument("--log-format", default="standard", choices=LOG_FORMATS, help="Console log format")
    args = p.parse_args(argv)

    setup_logging(args.log_level, args.log_format)

    try:
        run_snapshot(args.chain, out_root=args.out_root, no_write=args.no_write)
    except TvlError as e:
        print(f"❌ {PROTOCOL}: {type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
