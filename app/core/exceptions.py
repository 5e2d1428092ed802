from typing import Any, List, Optional, Sequence
from fastapi import HTTPException, status

class BaseAppException(HTTPException):
    def __init__(self, status_code: int, detail: str, error: Any = None, headers: Optional[dict] = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error = error

    def __str__(self) -> str:
        return str(self.detail)

class ValidationError(BaseAppException):
    def __init__(self, detail: str = "Validation error", error: Any = None):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail, error=error)

class NoValidRowsError(ValidationError):
    """Raised by the import pipeline when every row failed validation"""
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(
            detail="No valid QR entries found. Errors: " + "; ".join(self.errors),
            error=self.errors,
        )

class AuthenticationError(BaseAppException):
    def __init__(self, detail: str = "Invalid authentication credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class NotFoundError(BaseAppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class MethodNotAllowedError(BaseAppException):
    def __init__(self, method: str):
        super().__init__(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail=f"Method {method} Not Allowed")

class ConflictError(BaseAppException):
    def __init__(self, detail: str = "Duplicate key error", error: Any = None):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail, error=error)

class StoreError(BaseAppException):
    """Uncategorized persistence failure. Surfaced to the caller, never retried here."""
    def __init__(self, detail: str = "Database operation failed", error: Any = None):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail, error=error)

class DuplicateKeyError(StoreError):
    def __init__(self, keys: Sequence[str], detail: Optional[str] = None):
        self.keys = list(keys)
        super().__init__(
            detail=detail or f"Duplicate key: {', '.join(self.keys)}",
            error={"qrCodeId": self.keys},
        )
