"""
Input validation schemas using Pydantic for the planner API.
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from weekplan.utilities.constants import MAX_THEME_LENGTH, MAX_EVENT_TEXT_LENGTH


class LoginInput(BaseModel):
    """Schema for the shared-password login."""
    password: str = Field(..., min_length=1)


class ThemeUpdateInput(BaseModel):
    """Schema for a week theme update; the second theme is optional."""
    theme1: str = Field("", max_length=MAX_THEME_LENGTH)
    theme2: str = Field("", max_length=MAX_THEME_LENGTH)

    @field_validator('theme1', 'theme2')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class ThemeDraftInput(BaseModel):
    """Schema for the in-progress theme draft; omitted fields are left as they are."""
    theme1: Optional[str] = Field(None, max_length=MAX_THEME_LENGTH)
    theme2: Optional[str] = Field(None, max_length=MAX_THEME_LENGTH)

    @field_validator('theme1', 'theme2')
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class EventTextInput(BaseModel):
    """Schema for editing an event's text."""
    text: str = Field(..., max_length=MAX_EVENT_TEXT_LENGTH)
