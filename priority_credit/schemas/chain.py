"""
Block submission and receipt schemas.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class TxRequest(BaseModel):
    """
    One contract call. The sender is authenticated upstream.

    Principals are not checked here: a malformed sender or argument comes
    back as an invalid_input receipt like any other failed call.
    """

    sender: str = Field(..., min_length=1, max_length=150)
    function: str = Field(..., min_length=1, max_length=128)
    args: List[Any] = Field(default_factory=list)
    contract: Optional[str] = Field(
        None,
        description="Target contract; defaults to the configured registry contract",
    )


class BlockSubmitRequest(BaseModel):
    """Ordered calls to mine as one block."""

    transactions: List[TxRequest] = Field(..., min_length=1, max_length=500)


class ErrorDetail(BaseModel):
    kind: str
    code: int


class EventResponse(BaseModel):
    type: str
    entity_type: str
    entity_id: str
    sender: Optional[str] = None
    payload: dict


class ReceiptResponse(BaseModel):
    """Outcome of one call."""

    tx_index: int
    sender: str
    function: str
    ok: bool
    value: Any = None
    error: Optional[ErrorDetail] = None
    events: List[EventResponse] = Field(default_factory=list)


class BlockResponse(BaseModel):
    """A mined block."""

    height: int
    receipt_count: int
    receipts: List[ReceiptResponse]

    @classmethod
    def from_receipts(cls, height: int, receipts: List[dict]) -> "BlockResponse":
        return cls(
            height=height,
            receipt_count=len(receipts),
            receipts=[ReceiptResponse.model_validate(r) for r in receipts],
        )
