"""Ledger services used by the HTTP layer."""
