import os

# Must be set before goal_tracker modules are imported so the engine uses sqlite
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ACCESS_LOG_PATH"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from goal_tracker.core.errors import StoreUnavailable  # noqa: E402
from goal_tracker.core.metrics import GoalsMetrics  # noqa: E402
from goal_tracker.main import create_app  # noqa: E402
from goal_tracker.schemas.goal import GoalRead  # noqa: E402
from goal_tracker.store import get_goal_store  # noqa: E402


class FakeGoalStore:
    """In-memory GoalStore. Set ``failing`` to make every call raise StoreUnavailable."""

    def __init__(self):
        self.goals = []
        self.calls = []
        self.failing = False
        self._next_id = 1

    def _check(self, name):
        self.calls.append(name)
        if self.failing:
            raise StoreUnavailable(f"{name} failed") from ConnectionError("store is down")

    def list_all(self):
        self._check("list_all")
        return list(self.goals)

    def create(self, text):
        self._check("create")
        goal = GoalRead(id=f"goal-{self._next_id}", text=text)
        self._next_id += 1
        self.goals.append(goal)
        return goal

    def delete_by_id(self, goal_id):
        self._check("delete_by_id")
        before = len(self.goals)
        self.goals = [g for g in self.goals if g.id != goal_id]
        return len(self.goals) < before


@pytest.fixture
def metrics():
    return GoalsMetrics(default_collectors=False)


@pytest.fixture
def store():
    return FakeGoalStore()


@pytest.fixture
def app(metrics, store):
    application = create_app(metrics=metrics)
    application.dependency_overrides[get_goal_store] = lambda: store
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


def sample(metrics, name, **labels):
    """Current value of a metric sample, 0.0 when the label set was never touched."""
    return metrics.registry.get_sample_value(name, labels) or 0.0
