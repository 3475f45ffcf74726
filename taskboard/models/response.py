"""
Response models for API replies
"""

from typing import Optional
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement response"""
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error_code: Optional[str] = None
    details: Optional[dict] = None
