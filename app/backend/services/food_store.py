"""Data access for the food/expiration tracker."""

import logging
import uuid
from datetime import date
from typing import Any, List, Mapping, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.backend.errors import NotFound, ReferentialViolation, ValidationError
from app.backend.models import FOOD_ID_MAX_LENGTH, USER_ID_MAX_LENGTH, Food, User

from .validators import reject_unknown_fields, require_date, require_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("food_id", "food_name", "exp")


class FoodStore:
    def __init__(self, db: Session):
        self.db = db

    def _user_exists(self, user_id: str) -> bool:
        return self.db.query(User.id).filter(User.user_id == user_id).first() is not None

    def create(
        self,
        food_id: Optional[str],
        food_name: str,
        exp: Union[date, str],
        owner_user_id: str,
    ) -> int:
        """Insert a food row owned by ``owner_user_id`` and return its surrogate id.

        ``food_id`` is a free label; repeats are allowed and it defaults to a
        random UUID string when omitted.
        """
        if food_id is None:
            food_id = str(uuid.uuid4())
        food = Food(
            food_id=require_text("food_id", food_id, FOOD_ID_MAX_LENGTH),
            food_name=require_text("food_name", food_name),
            exp=require_date("exp", exp),
            user_id=require_text("user_id", owner_user_id, USER_ID_MAX_LENGTH),
        )
        if not self._user_exists(owner_user_id):
            logger.warning(f"Rejected food {food_id}: unknown owner {owner_user_id}")
            raise ReferentialViolation(f"User '{owner_user_id}' does not exist")

        self.db.add(food)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # owner deleted between the check and the insert
            self.db.rollback()
            logger.warning(f"Foreign key rejected food {food_id}: {exc.orig}")
            raise ReferentialViolation(
                f"User '{owner_user_id}' does not exist"
            ) from exc
        self.db.refresh(food)
        logger.info(f"Created food {food_id} (id={food.id}) for {owner_user_id}")
        return food.id

    def list_by_user(self, owner_user_id: str) -> List[Food]:
        """Food rows of one user, soonest expiry first.

        Raises NotFound when the user itself does not exist.
        """
        if not self._user_exists(owner_user_id):
            raise NotFound(f"User '{owner_user_id}' not found")
        return (
            self.db.query(Food)
            .filter(Food.user_id == owner_user_id)
            .order_by(Food.exp.asc(), Food.id.asc())
            .all()
        )

    def get(self, food_row_id: int) -> Food:
        food = self.db.query(Food).filter(Food.id == food_row_id).first()
        if food is None:
            raise NotFound(f"Food row {food_row_id} not found")
        return food

    def update(self, food_row_id: int, fields: Mapping[str, Any]) -> Food:
        if "user_id" in fields:
            raise ValidationError("Food rows cannot be moved to another user")
        reject_unknown_fields(fields, UPDATABLE_FIELDS)
        changes = {}
        if "food_id" in fields:
            changes["food_id"] = require_text(
                "food_id", fields["food_id"], FOOD_ID_MAX_LENGTH
            )
        if "food_name" in fields:
            changes["food_name"] = require_text("food_name", fields["food_name"])
        if "exp" in fields:
            changes["exp"] = require_date("exp", fields["exp"])

        food = self.get(food_row_id)
        for key, value in changes.items():
            setattr(food, key, value)
        self.db.commit()
        self.db.refresh(food)
        logger.info(f"Updated food row {food_row_id} fields={sorted(changes)}")
        return food

    def delete(self, food_row_id: int) -> None:
        food = self.get(food_row_id)
        self.db.delete(food)
        self.db.commit()
        logger.info(f"Deleted food row {food_row_id}")
