"""Blocksquare TVL package: fetch active property tokens from the Envio indexer and sum their DAI valuations."""
__all__ = [
    "config",
    "exceptions",
    "models",
    "fetcher",
    "aggregator",
    "adapter",
]
