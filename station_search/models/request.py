"""Request models for API endpoints."""

from pydantic import BaseModel, Field, validator

from ..config import get_settings


def _check_length(v: str) -> str:
    limit = get_settings().max_query_length
    if len(v) > limit:
        raise ValueError(f"Text too long. Maximum length is {limit} characters")
    return v


class KeyPressRequest(BaseModel):
    """Request model for characters typed on the keypad."""
    
    text: str = Field(..., min_length=1, description="Characters appended to the search text")

    @validator('text')
    def validate_text(cls, v: str) -> str:
        """Validate typed text length."""
        return _check_length(v)


class SearchTextRequest(BaseModel):
    """Request model replacing the whole search text."""
    
    text: str = Field(..., description="The full text to search for; may be empty")

    @validator('text')
    def validate_text(cls, v: str) -> str:
        """Validate search text length."""
        return _check_length(v)
