from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.backend.database import get_db
from app.backend.errors import StoreError, to_http_exception
from app.backend.models import (
    MAIL_MAX_LENGTH,
    USER_ID_MAX_LENGTH,
    USER_NAME_MAX_LENGTH,
    User,
)
from app.backend.services.food_store import FoodStore
from app.backend.services.passwords import hash_password
from app.backend.services.user_store import UserStore

from .foods import FoodListResponse, FoodResponse

router = APIRouter()


class UserCreateRequest(BaseModel):
    user_id: Optional[str] = Field(None, min_length=1, max_length=USER_ID_MAX_LENGTH)
    user_name: str = Field(..., min_length=1, max_length=USER_NAME_MAX_LENGTH)
    mail: str = Field(..., min_length=1, max_length=MAIL_MAX_LENGTH)
    password: str = Field(..., min_length=1)


class UserUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: Optional[str] = Field(None, min_length=1, max_length=USER_ID_MAX_LENGTH)
    user_name: Optional[str] = Field(
        None, min_length=1, max_length=USER_NAME_MAX_LENGTH
    )
    mail: Optional[str] = Field(None, min_length=1, max_length=MAIL_MAX_LENGTH)
    password: Optional[str] = Field(None, min_length=1)


class UserResponse(BaseModel):
    """Public view of a user; the stored password never leaves the service."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    user_name: str
    mail: str


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreateRequest, db: Session = Depends(get_db)):
    store = UserStore(db)
    try:
        new_id = store.create(
            body.user_id,
            body.user_name,
            body.mail,
            hash_password(body.password),
        )
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return db.get(User, new_id)


@router.get("/{user_id}", response_model=UserResponse)
def read_user(user_id: str, db: Session = Depends(get_db)):
    try:
        return UserStore(db).get_by_user_id(user_id)
    except StoreError as exc:
        raise to_http_exception(exc) from exc


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, body: UserUpdateRequest, db: Session = Depends(get_db)):
    # explicit nulls reach the store and are rejected there
    fields = body.model_dump(exclude_unset=True)
    if isinstance(fields.get("password"), str):
        fields["password"] = hash_password(fields["password"])
    try:
        return UserStore(db).update(user_id, fields)
    except StoreError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    try:
        UserStore(db).delete(user_id)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/foods", response_model=FoodListResponse)
def list_user_foods(user_id: str, db: Session = Depends(get_db)):
    try:
        items = FoodStore(db).list_by_user(user_id)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    foods: List[FoodResponse] = [FoodResponse.model_validate(item) for item in items]
    return FoodListResponse(total=len(foods), foods=foods)
