"""pairswap: reserve/share accounting for a two-asset constant-product pool."""

__version__ = "0.1.0"
