from sqlalchemy import Column, Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.backend.database import Base

from .user import USER_ID_MAX_LENGTH

FOOD_ID_MAX_LENGTH = 40


class Food(Base):
    __tablename__ = "food_table"
    __table_args__ = (Index("usr_id", "user_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    # an opaque label, intentionally not unique
    food_id = Column(String(FOOD_ID_MAX_LENGTH), nullable=False)
    food_name = Column(Text, nullable=False)
    exp = Column(Date, nullable=False)
    user_id = Column(
        String(USER_ID_MAX_LENGTH),
        ForeignKey("user_table.user_id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )

    user = relationship("User", back_populates="foods")
