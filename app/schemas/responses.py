"""Standardized API Response Schemas"""

from typing import Generic, TypeVar, Optional
from pydantic import BaseModel, Field

from app.core.exceptions import DomainError


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {"bill_code": "BILM1X2Y3Z4AB12", "balance_amount": "1700.00", ...},
            "message": "Payment added successfully"
        }
    """
    success: bool = True
    data: Optional[T] = None
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    """Error details structure"""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standard error response envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "CONFLICT",
                "message": "Bed B-101 is not available. Current status: occupied"
            }
        }
    """
    success: bool = False
    error: ErrorDetail

    @classmethod
    def from_error(cls, exc: DomainError) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=exc.code, message=exc.message))


class ListMeta(BaseModel):
    """Result count for list endpoints"""
    count: int = Field(..., ge=0)


class ListResponse(BaseModel, Generic[T]):
    """List payload with its item count."""
    success: bool = True
    data: list[T]
    meta: ListMeta
    message: str = "Operation successful"

    @classmethod
    def of(cls, items: list, message: str = "Operation successful") -> "ListResponse":
        return cls(data=items, meta=ListMeta(count=len(items)), message=message)
