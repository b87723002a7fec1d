from typing import Optional, Any

from utils.constants import OTP_SEND_FAILED_MESSAGE, FORM_SUBMIT_FAILED_MESSAGE

class AdmissionError(Exception):
    """
    Base exception for the admission backend.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(AdmissionError):
    """
    Raised when required request fields or files are missing or invalid.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code, status_code=400, details=details)

class InvalidPhoneError(ValidationError):
    """
    Raised when a phone number is empty or has no digits.
    """
    def __init__(self, message: str = "Invalid phone number", details: Optional[Any] = None):
        super().__init__(message, details=details, code="INVALID_PHONE")

class ConfigurationError(AdmissionError):
    """
    Raised when a required endpoint or credential is not configured.
    """
    def __init__(self, message: str = "Service is not configured", details: Optional[Any] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", status_code=500, details=details)

class ExternalServiceError(AdmissionError):
    """
    Raised when an external service (messaging API, Google Sheet) fails.
    """
    def __init__(self, message: str = "External service error", details: Optional[Any] = None, code: str = "EXTERNAL_SERVICE_ERROR"):
        super().__init__(message, code=code, status_code=500, details=details)

class DeliveryError(ExternalServiceError):
    """
    Raised when the OTP message could not be delivered.
    """
    def __init__(self, message: str = OTP_SEND_FAILED_MESSAGE, details: Optional[Any] = None):
        super().__init__(message, details=details, code="DELIVERY_FAILED")

class ForwardError(ExternalServiceError):
    """
    Raised when a form submission could not be forwarded to the sheet.
    """
    def __init__(self, message: str = FORM_SUBMIT_FAILED_MESSAGE, details: Optional[Any] = None):
        super().__init__(message, details=details, code="FORWARD_FAILED")
