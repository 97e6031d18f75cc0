"""Data model and in-memory block archive for ICRC-7/ICRC-37 style NFT ledgers."""

__version__ = "0.1.0"