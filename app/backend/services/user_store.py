"""Data access for the user registry."""

import logging
import uuid
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.backend.errors import DuplicateKey, NotFound, ValidationError
from app.backend.models import (
    MAIL_MAX_LENGTH,
    USER_ID_MAX_LENGTH,
    USER_NAME_MAX_LENGTH,
    User,
)

from .validators import reject_unknown_fields, require_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("user_id", "user_name", "mail", "password")


def _require_password(value: Any) -> str:
    # stored verbatim; hashing is the caller's policy
    if not isinstance(value, str):
        raise ValidationError("password must be a string")
    return value


class UserStore:
    """CRUD over ``user_table``.

    Deleting or renaming a user cascades to its food rows inside the
    database; nothing here touches ``food_table`` directly.
    """

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def create(
        self,
        user_id: Optional[str],
        user_name: str,
        mail: str,
        password_hash: str,
    ) -> int:
        """Insert a user and return its surrogate id.

        ``user_id`` defaults to a random UUID string when omitted.
        """
        if user_id is None:
            user_id = str(uuid.uuid4())
        user = User(
            user_id=require_text("user_id", user_id, USER_ID_MAX_LENGTH),
            user_name=require_text("user_name", user_name, USER_NAME_MAX_LENGTH),
            mail=require_text("mail", mail, MAIL_MAX_LENGTH),
            password=_require_password(password_hash),
        )
        if self._find(user_id) is not None:
            logger.warning(f"Rejected duplicate user_id: {user_id}")
            raise DuplicateKey(f"user_id '{user_id}' already exists")

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"Unique constraint rejected user_id {user_id}: {exc.orig}")
            raise DuplicateKey(f"user_id '{user_id}' already exists") from exc
        self.db.refresh(user)
        logger.info(f"Created user {user_id} (id={user.id})")
        return user.id

    def get_by_user_id(self, user_id: str) -> User:
        user = self._find(user_id)
        if user is None:
            raise NotFound(f"User '{user_id}' not found")
        return user

    def update(self, user_id: str, fields: Mapping[str, Any]) -> User:
        """Apply a partial update.

        Renaming ``user_id`` moves every owned food row along with it.
        """
        reject_unknown_fields(fields, UPDATABLE_FIELDS)
        changes = {}
        if "user_id" in fields:
            changes["user_id"] = require_text(
                "user_id", fields["user_id"], USER_ID_MAX_LENGTH
            )
        if "user_name" in fields:
            changes["user_name"] = require_text(
                "user_name", fields["user_name"], USER_NAME_MAX_LENGTH
            )
        if "mail" in fields:
            changes["mail"] = require_text("mail", fields["mail"], MAIL_MAX_LENGTH)
        if "password" in fields:
            changes["password"] = _require_password(fields["password"])

        user = self.get_by_user_id(user_id)
        new_user_id = changes.get("user_id", user_id)
        # case-insensitive collations can match the row being renamed
        existing = self._find(new_user_id) if new_user_id != user_id else None
        if existing is not None and existing.id != user.id:
            logger.warning(f"Rejected rename of {user_id} onto existing {new_user_id}")
            raise DuplicateKey(f"user_id '{new_user_id}' already exists")

        for key, value in changes.items():
            setattr(user, key, value)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"Unique constraint rejected rename to {new_user_id}: {exc.orig}")
            raise DuplicateKey(f"user_id '{new_user_id}' already exists") from exc
        self.db.refresh(user)
        logger.info(f"Updated user {user_id} fields={sorted(changes)}")
        return user

    def delete(self, user_id: str) -> None:
        user = self.get_by_user_id(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {user_id} and its food rows")
