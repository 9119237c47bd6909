"""Backend services for the pension allowance ledger."""
