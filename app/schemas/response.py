from pydantic import BaseModel
from typing import Optional, Any

class SuccessResponse(BaseModel):
    """
    Standard success response structure.
    """
    success: bool = True

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    success: bool = False
    message: str
    code: str
    details: Optional[Any] = None
