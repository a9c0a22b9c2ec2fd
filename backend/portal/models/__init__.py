"""
Database models module initialization.

Models exported:
- User: User account, credentials and preferences
"""
from .user import User
