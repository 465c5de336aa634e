"""
Indy API client modules.

This package provides the client for the Indy REST endpoints used by a replay:
folo records, store administration and artifact content transport.
"""

from .indy_client import IndyClient

__all__ = ["IndyClient"]
