from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """Uniform {success, message, data?, error?} envelope"""
    success: bool = True
    message: str
    data: Optional[T] = None
    error: Optional[Any] = None
