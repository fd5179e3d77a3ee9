"""
Address screening: batch risk screening of blockchain addresses.

Resolves the remote category catalog, screens addresses in rate-limited
concurrent batches, and flattens each screening into a CSV report row.
"""

__version__ = "0.1.0"
