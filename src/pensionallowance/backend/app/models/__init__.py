"""Typed request/response models shared by the ledger service and routes.

Requests are validated with Pydantic while the ledger itself is built from
frozen dataclasses; these models describe only the serialised boundary.
"""

from __future__ import annotations

from .api import (
    CarryForwardEntry,
    ConsumerEntry,
    LedgerRequest,
    LedgerResponse,
    LedgerSummaryPayload,
    ResponseMeta,
    SegmentEntry,
    ViewPayload,
    YearEntry,
    format_validation_error,
)

__all__ = [
    "CarryForwardEntry",
    "ConsumerEntry",
    "LedgerRequest",
    "LedgerResponse",
    "LedgerSummaryPayload",
    "ResponseMeta",
    "SegmentEntry",
    "ViewPayload",
    "YearEntry",
    "format_validation_error",
]
