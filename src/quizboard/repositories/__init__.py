"""Data access helpers."""

from .ledger_repo import LedgerRepository

__all__ = ["LedgerRepository"]
