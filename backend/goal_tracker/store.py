"""Goal persistence behind a narrow list/create/delete interface."""
import logging
from typing import Protocol, Sequence

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from goal_tracker.core.errors import StoreUnavailable
from goal_tracker.db import get_db
from goal_tracker.models.goal import Goal


logger = logging.getLogger(__name__)


class StoredGoal(Protocol):
    id: str
    text: str


class GoalStore(Protocol):
    def list_all(self) -> Sequence[StoredGoal]: ...

    def create(self, text: str) -> StoredGoal: ...

    def delete_by_id(self, goal_id: str) -> bool: ...


class SqlGoalStore:
    """GoalStore over a SQLAlchemy session. Driver errors surface as StoreUnavailable."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Goal]:
        try:
            return self.db.query(Goal).order_by(Goal.seq).all()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreUnavailable("listing goals failed") from exc

    def create(self, text: str) -> Goal:
        goal = Goal(text=text)
        try:
            self.db.add(goal)
            self.db.commit()
            self.db.refresh(goal)
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreUnavailable("saving goal failed") from exc
        return goal

    def delete_by_id(self, goal_id: str) -> bool:
        try:
            deleted = self.db.query(Goal).filter(Goal.id == goal_id).delete()
            self.db.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreUnavailable("deleting goal failed") from exc
        return deleted > 0

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.warning("rollback after store failure also failed", exc_info=True)


def get_goal_store(db: Session = Depends(get_db)) -> GoalStore:
    return SqlGoalStore(db)
