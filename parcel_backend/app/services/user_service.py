"""
User Service.

Sign-in bookkeeping: the first sign-in creates the user, later ones only
refresh ``last_log_in``.
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from parcel_backend.app.db.document_store import DocumentStore
from parcel_backend.app.models.document import utcnow

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    async def upsert_user(store: DocumentStore, payload: Mapping[str, Any]) -> Tuple[bool, Optional[str]]:
        """
        Create the user on first sign-in.

        Returns:
            ``(True, new id)`` when the user was created,
            ``(False, None)`` when it already existed
        """
        email = payload["email"]
        now = utcnow()

        existing = await store.users.find_one({"email": email})
        if existing is not None:
            await store.users.update_one({"email": email}, {"last_log_in": now})
            await store.commit()
            return False, None

        record = {key: value for key, value in payload.items() if key not in ("id", "_id")}
        record.update(created_at=now, last_log_in=now)
        user_id = await store.users.insert_one(record)
        await store.commit()

        logger.info("User %s created", email)
        return True, user_id
