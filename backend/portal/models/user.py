# portal/models/user.py
"""
Database model for users.
Represents a registered account with its credentials and free-form
preferences.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Username and email are unique and stored lowercase
    - password_hash must never leave the store adapter in a read path
    """
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)  # Immutable identity
    username = fields.CharField(max_length=256, unique=True, index=True)
    email = fields.CharField(max_length=256, unique=True)
    password_hash = fields.CharField(max_length=255)
    preferences = fields.JSONField(default=dict)  # Open-ended JSON object
    created_at = fields.DatetimeField(auto_now_add=True)  # Set once on creation

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    def public_preferences(self) -> dict:
        """Preferences as a JSON object, `{}` when absent."""
        return self.preferences if isinstance(self.preferences, dict) else {}
