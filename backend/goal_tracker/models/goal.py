import uuid

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from goal_tracker.db import Base


def new_goal_id() -> str:
    return uuid.uuid4().hex


class Goal(Base):
    __tablename__ = "goals"

    # Insertion order, used for listing
    seq = Column(Integer, primary_key=True, autoincrement=True)

    # Public identifier handed to clients
    id = Column(String(32), unique=True, index=True, nullable=False, default=new_goal_id)

    text = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
