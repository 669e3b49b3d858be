from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.backend.database import get_db
from app.backend.errors import StoreError, to_http_exception
from app.backend.models import FOOD_ID_MAX_LENGTH, USER_ID_MAX_LENGTH, Food
from app.backend.services.food_store import FoodStore

router = APIRouter()


class FoodCreateRequest(BaseModel):
    food_id: Optional[str] = Field(None, min_length=1, max_length=FOOD_ID_MAX_LENGTH)
    food_name: str = Field(..., min_length=1)
    exp: date
    user_id: str = Field(..., min_length=1, max_length=USER_ID_MAX_LENGTH)


class FoodUpdateRequest(BaseModel):
    # no user_id: rows never change owner
    model_config = ConfigDict(extra="forbid")

    food_id: Optional[str] = Field(None, min_length=1, max_length=FOOD_ID_MAX_LENGTH)
    food_name: Optional[str] = Field(None, min_length=1)
    exp: Optional[date] = None


class FoodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    food_id: str
    food_name: str
    exp: date
    user_id: str


class FoodListResponse(BaseModel):
    total: int
    foods: List[FoodResponse]


@router.post("/", response_model=FoodResponse, status_code=status.HTTP_201_CREATED)
def create_food(body: FoodCreateRequest, db: Session = Depends(get_db)):
    try:
        new_id = FoodStore(db).create(
            body.food_id, body.food_name, body.exp, body.user_id
        )
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return db.get(Food, new_id)


@router.get("/{food_row_id}", response_model=FoodResponse)
def read_food(food_row_id: int, db: Session = Depends(get_db)):
    try:
        return FoodStore(db).get(food_row_id)
    except StoreError as exc:
        raise to_http_exception(exc) from exc


@router.patch("/{food_row_id}", response_model=FoodResponse)
def update_food(
    food_row_id: int, body: FoodUpdateRequest, db: Session = Depends(get_db)
):
    fields = body.model_dump(exclude_unset=True)
    try:
        return FoodStore(db).update(food_row_id, fields)
    except StoreError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{food_row_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_food(food_row_id: int, db: Session = Depends(get_db)):
    try:
        FoodStore(db).delete(food_row_id)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
