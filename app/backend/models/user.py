from sqlalchemy import Column, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.backend.database import Base

USER_ID_MAX_LENGTH = 40
USER_NAME_MAX_LENGTH = 255
MAIL_MAX_LENGTH = 255


class User(Base):
    __tablename__ = "user_table"
    __table_args__ = (UniqueConstraint("user_id", name="user_id_idx"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(USER_ID_MAX_LENGTH), nullable=False)
    user_name = Column(String(USER_NAME_MAX_LENGTH), nullable=False)
    mail = Column(String(MAIL_MAX_LENGTH), nullable=False)
    password = Column(Text, nullable=False)

    # cascades run in the database; the ORM must not issue its own deletes/updates
    foods = relationship(
        "Food",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        passive_updates=True,
    )
