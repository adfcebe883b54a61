"""
Custom application exceptions
"""

from typing import Optional, Dict, Any


class ProductiveSpaceException(Exception):
    """Base exception for the booking core"""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ProductiveSpaceException):
    """Validation errors"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class PackageApplicationError(ProductiveSpaceException):
    """The backend did not persist a computed package discount"""

    def __init__(self, booking_id: str, package_id: str, message: str = None):
        super().__init__(
            message=message or "Failed to apply package",
            code="PACKAGE_APPLY_FAILED",
            status_code=502,
            details={"booking_id": booking_id, "package_id": package_id}
        )
