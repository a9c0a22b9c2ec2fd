# portal/core/db.py
"""
Store configuration and the user store adapter.

The adapter is an explicitly constructed object: the application creates one
at startup, calls `connect()`, hands it to request handlers through a
dependency, and calls `close()` on shutdown.
"""
import logging
from tortoise import Tortoise
from tortoise.exceptions import BaseORMException, IntegrityError

from portal.config import settings
from portal.core.errors import ConflictError, StoreError
from portal.models.user import User

logger = logging.getLogger(__name__)


def tortoise_config(db_url: str) -> dict:
    """Tortoise ORM configuration dictionary for the given connection URL."""
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {
                "models": [
                    "portal.models.user",   # User model
                    "aerich.models",        # Required: Let Aerich manage migration tables
                ],
                "default_connection": "default",
            },
        },
    }

# Also used by Aerich for database migrations
TORTOISE_ORM = tortoise_config(settings.database_url)


class UserStore:
    """
    Adapter over the single `users` collection.

    Exposes only the three operations the auth layer needs: lookup by
    filter, partial update by filter and insert with uniqueness
    enforcement. ORM failures are translated to `ConflictError` (unique
    constraint) or `StoreError` (anything else).
    """

    def __init__(self, db_url: str | None = None, *, generate_schemas: bool = False):
        self.db_url = db_url or settings.database_url
        self.generate_schemas = generate_schemas
        self.connected = False

    async def connect(self) -> None:
        """Open the connection pool and register models."""
        await Tortoise.init(config=tortoise_config(self.db_url))
        if self.generate_schemas:
            await Tortoise.generate_schemas()
        self.connected = True
        logger.info("[store] connected to %s", self.db_url.split("@")[-1])

    async def close(self) -> None:
        """Release all connections."""
        await Tortoise.close_connections()
        self.connected = False
        logger.info("[store] connections closed")

    async def find_one(self, **filters) -> User | None:
        try:
            return await User.get_or_none(**filters)
        except BaseORMException as exc:
            logger.error("[store] find_one failed: %s", exc)
            raise StoreError() from exc

    async def update_one(self, filters: dict, values: dict) -> int:
        """
        Apply `values` to the record matching `filters`.

        Returns:
            Number of updated rows (0 or 1)

        Raises:
            ConflictError: If the update violates username/email uniqueness
            StoreError: On any other store failure
        """
        try:
            return await User.filter(**filters).update(**values)
        except IntegrityError as exc:
            raise ConflictError() from exc
        except BaseORMException as exc:
            logger.error("[store] update_one failed: %s", exc)
            raise StoreError() from exc

    async def insert_one(self, record: dict) -> User:
        """
        Insert a new user record.

        Raises:
            ConflictError: If username or email already exists
            StoreError: On any other store failure
        """
        try:
            return await User.create(**record)
        except IntegrityError as exc:
            raise ConflictError() from exc
        except BaseORMException as exc:
            logger.error("[store] insert_one failed: %s", exc)
            raise StoreError() from exc
