# portal/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.

Request fields are typed `Any` on purpose: type checks happen in the
services so that each failing rule yields its own message instead of a
framework validation error. Login takes its raw body and has no schema.
"""
from typing import Any
from pydantic import BaseModel

class RegisterIn(BaseModel):
    """Signup payload; preferences is optional and must be an object."""
    username: Any = None
    password: Any = None
    email: Any = None
    preferences: Any = None
