# portal/schemas/profile.py
"""Pydantic schemas for preference and profile updates."""
from typing import Any
from pydantic import BaseModel

class PreferencesIn(BaseModel):
    preferences: Any = None

class ProfileUpdateIn(BaseModel):
    # Each field is applied only when present and well typed
    username: Any = None
    preferences: Any = None
