import logging
from typing import Optional

from fastapi import APIRouter, Depends

from goal_tracker.core.constants import (
    OPERATION_CREATE,
    OPERATION_DELETE,
    OPERATION_FETCH,
    STATUS_ERROR,
    STATUS_SUCCESS,
)
from goal_tracker.core.errors import GoalsApiError, GoalValidationError, StoreUnavailable
from goal_tracker.core.metrics import GoalsMetrics, request_metrics
from goal_tracker.core.validation import validate_goal_text
from goal_tracker.schemas.goal import GoalCreate, GoalCreated, GoalList, GoalRead, Message
from goal_tracker.store import GoalStore, get_goal_store


logger = logging.getLogger(__name__)

# Full paths on each route so the matched route carries the complete template
router = APIRouter(tags=["goals"])


@router.get("/goals", response_model=GoalList)
def list_goals(
    store: GoalStore = Depends(get_goal_store),
    metrics: GoalsMetrics = Depends(request_metrics),
):
    logger.info("Fetching goals")
    try:
        goals = store.list_all()
    except StoreUnavailable as exc:
        logger.error("Error fetching goals: %s", exc.__cause__ or exc)
        metrics.record_operation(OPERATION_FETCH, STATUS_ERROR)
        raise GoalsApiError(500, "Failed to load goals.")

    metrics.record_operation(OPERATION_FETCH, STATUS_SUCCESS)
    logger.info("Fetched %d goals", len(goals))
    return GoalList(goals=[GoalRead.model_validate(g) for g in goals])


@router.post("/goals", status_code=201, response_model=GoalCreated)
def create_goal(
    payload: Optional[GoalCreate] = None,
    store: GoalStore = Depends(get_goal_store),
    metrics: GoalsMetrics = Depends(request_metrics),
):
    logger.info("Storing goal")
    text = payload.text if payload is not None else None
    try:
        validate_goal_text(text)
    except GoalValidationError as exc:
        logger.info("Rejected goal text (%s)", exc.reason)
        metrics.record_validation_error(exc.reason)
        raise

    # Store the text as sent; trimming only applies to the checks
    try:
        goal = store.create(text)
    except StoreUnavailable as exc:
        logger.error("Error saving goal: %s", exc.__cause__ or exc)
        metrics.record_operation(OPERATION_CREATE, STATUS_ERROR)
        raise GoalsApiError(500, "Failed to save goal.")

    metrics.record_operation(OPERATION_CREATE, STATUS_SUCCESS)
    logger.info("Stored goal %s", goal.id)
    return GoalCreated(message="Goal saved", goal=GoalRead(id=goal.id, text=text))


@router.delete("/goals/{goal_id}", response_model=Message)
def delete_goal(
    goal_id: str,
    store: GoalStore = Depends(get_goal_store),
    metrics: GoalsMetrics = Depends(request_metrics),
):
    logger.info("Deleting goal %s", goal_id)
    try:
        # A missing id is not an error
        found = store.delete_by_id(goal_id)
    except StoreUnavailable as exc:
        logger.error("Error deleting goal %s: %s", goal_id, exc.__cause__ or exc)
        metrics.record_operation(OPERATION_DELETE, STATUS_ERROR)
        raise GoalsApiError(500, "Failed to delete goal.")

    metrics.record_operation(OPERATION_DELETE, STATUS_SUCCESS)
    logger.info("Deleted goal %s (found=%s)", goal_id, found)
    return Message(message="Deleted goal!")
