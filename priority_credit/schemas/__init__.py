"""
Pydantic schemas for API request/response validation.
"""

from priority_credit.schemas.common import ErrorResponse, HealthResponse
from priority_credit.schemas.chain import (
    TxRequest,
    BlockSubmitRequest,
    ReceiptResponse,
    BlockResponse,
)
from priority_credit.schemas.registry import (
    AdministratorResponse,
    ValidatorResponse,
    DeveloperResponse,
    DeveloperValidatorResponse,
    RoleResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Chain
    "TxRequest",
    "BlockSubmitRequest",
    "ReceiptResponse",
    "BlockResponse",
    # Registry
    "AdministratorResponse",
    "ValidatorResponse",
    "DeveloperResponse",
    "DeveloperValidatorResponse",
    "RoleResponse",
]
