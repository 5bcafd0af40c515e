"""Domain layer for ledgerbook application."""

from ledgerbook.domain.ledger import Ledger

__all__ = ["Ledger"]
