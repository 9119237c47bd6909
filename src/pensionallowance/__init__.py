"""UK pension annual allowance and carry-forward ledger."""
