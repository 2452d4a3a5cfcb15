"""Shared response envelopes."""
from typing import Generic, List, Optional, TypeVar, Union
from pydantic import BaseModel

T = TypeVar("T")


class MessageResponse(BaseModel, Generic[T]):
    """Success envelope: a human readable message plus the payload."""
    message: str
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Error envelope produced by the exception handlers."""
    statusCode: int
    message: Union[str, List[str]]


# OpenAPI documentation for the error envelope
ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 403, 404, 409)
}
