# This file defines the member review endpoints.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.authorization import MemberUserDep
from src.api.dependencies import get_review_service
from src.api.schemas.common import ERROR_RESPONSES
from src.api.schemas.review_schemas import (
    PageReviewSummary,
    Review,
    ReviewCreate,
    ReviewRequest,
    ReviewUpdate,
)
from src.api.services.review_service import ReviewService

router = APIRouter(
    prefix="/shoppingMall/memberUser/reviews", tags=["reviews"], responses=ERROR_RESPONSES
)
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]


@router.patch("", response_model=PageReviewSummary)
def search_reviews(
    member_user: MemberUserDep, body: ReviewRequest, service: ReviewServiceDep
) -> dict[str, object]:
    return service.search_reviews(member_user.id, body)


@router.post("", response_model=Review, status_code=status.HTTP_201_CREATED)
def create_review(
    member_user: MemberUserDep, body: ReviewCreate, service: ReviewServiceDep
) -> dict[str, object]:
    return service.create_review(member_user.id, body)


@router.put("/{review_id}", response_model=Review)
def update_review(
    member_user: MemberUserDep, review_id: str, body: ReviewUpdate, service: ReviewServiceDep
) -> dict[str, object]:
    return service.update_review(member_user.id, review_id, body)
