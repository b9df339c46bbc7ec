"""JSON API over the ledger services."""
