from .food import FOOD_ID_MAX_LENGTH, Food
from .user import MAIL_MAX_LENGTH, USER_ID_MAX_LENGTH, USER_NAME_MAX_LENGTH, User

__all__ = [
    "User",
    "Food",
    "USER_ID_MAX_LENGTH",
    "USER_NAME_MAX_LENGTH",
    "MAIL_MAX_LENGTH",
    "FOOD_ID_MAX_LENGTH",
]
