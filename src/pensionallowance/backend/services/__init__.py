"""Request and response helpers shared by the HTTP routes."""

from .request_parser import parse_ledger_payload
from .response_builder import build_ledger_response

__all__ = [
    "build_ledger_response",
    "parse_ledger_payload",
]
