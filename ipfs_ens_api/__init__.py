"""IPFS-ENS deployment API."""

__version__ = "0.1.0"
