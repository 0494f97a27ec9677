from typing import Optional
from pydantic import BaseModel, ConfigDict


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str


class GoalList(BaseModel):
    goals: list[GoalRead]


class GoalCreate(BaseModel):
    # Optional so a missing field reaches the goal text rules instead of schema validation
    text: Optional[str] = None


class GoalCreated(BaseModel):
    message: str
    goal: GoalRead


class Message(BaseModel):
    message: str
