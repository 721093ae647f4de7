"""
API endpoints for user feedback.

Each user sees and deletes only their own comments.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from moolaegis.core.database.entities.feedback import Feedback
from moolaegis.core.database.repositories.feedback import FeedbackRepository
from moolaegis.core.models.io.feedback import FeedbackCreate, FeedbackRead
from moolaegis.server.services.deps import CurrentUserDep, SessionDep

router = APIRouter()


@router.get(
    "/",
    response_model=List[FeedbackRead],
    summary="List Feedback",
    description="List the current user's feedback, newest first.",
    response_description="List of feedback items.",
)
async def list_feedback(user: CurrentUserDep, session: SessionDep) -> List[FeedbackRead]:
    items = await FeedbackRepository(session).list(filters={"user_id": user.id})
    return [FeedbackRead.model_validate(item) for item in items]


@router.post(
    "/",
    response_model=FeedbackRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Feedback",
    description="Store a feedback comment for the current user.",
    responses={
        201: {"description": "Feedback stored"},
        422: {"description": "Empty comment"},
    },
)
async def create_feedback(payload: FeedbackCreate, user: CurrentUserDep, session: SessionDep) -> FeedbackRead:
    """
    Submit feedback.

    - **comment**: Feedback text; surrounding whitespace is removed and it must not be empty.
    """
    item = await FeedbackRepository(session).create(Feedback(user_id=user.id, comment=payload.comment))
    return FeedbackRead.model_validate(item)


@router.delete(
    "/{feedback_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Feedback",
    description="Delete one of the current user's feedback items.",
    responses={
        204: {"description": "Feedback deleted"},
        404: {"description": "Feedback not found"},
    },
)
async def delete_feedback(feedback_id: int, user: CurrentUserDep, session: SessionDep) -> Response:
    deleted = await FeedbackRepository(session).delete_for_user(feedback_id, user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Feedback {feedback_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
