# This file defines inquiry, comment and seller response endpoints.
# Admins search inquiries, their comments and seller responses and moderate review comments;
# members edit their own inquiries and inquiry comments; sellers edit their own responses.
# Review comment threads are readable by admins, members and sellers.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.authorization import AdminUserDep, MemberUserDep, SellerUserDep
from src.api.dependencies import get_inquiry_service
from src.api.schemas.common import ERROR_RESPONSES
from src.api.schemas.inquiry_schemas import (
    Comment,
    CommentRequest,
    CommentUpdate,
    Inquiry,
    InquiryRequest,
    InquiryUpdate,
    PageCommentSummary,
    PageInquirySummary,
    PageSellerResponseSummary,
    SellerResponse,
    SellerResponseRequest,
    SellerResponseUpdate,
)
from src.api.services.inquiry_service import InquiryService

router = APIRouter(prefix="/shoppingMall", tags=["inquiries"], responses=ERROR_RESPONSES)
InquiryServiceDep = Annotated[InquiryService, Depends(get_inquiry_service)]


@router.patch("/adminUser/inquiries", response_model=PageInquirySummary)
def search_inquiries(
    admin_user: AdminUserDep, body: InquiryRequest, service: InquiryServiceDep
) -> dict[str, object]:
    return service.search_inquiries(body)


@router.put("/memberUser/inquiries/{inquiry_id}", response_model=Inquiry)
def update_inquiry(
    member_user: MemberUserDep, inquiry_id: str, body: InquiryUpdate, service: InquiryServiceDep
) -> dict[str, object]:
    return service.update_inquiry(member_user.id, inquiry_id, body)


@router.patch("/adminUser/inquiries/{inquiry_id}/comments", response_model=PageCommentSummary)
def search_inquiry_comments(
    admin_user: AdminUserDep, inquiry_id: str, body: CommentRequest, service: InquiryServiceDep
) -> dict[str, object]:
    return service.search_inquiry_comments(inquiry_id, body, principal=admin_user)


@router.put("/memberUser/inquiries/{inquiry_id}/comments/{comment_id}", response_model=Comment)
def update_inquiry_comment(
    member_user: MemberUserDep,
    inquiry_id: str,
    comment_id: str,
    body: CommentUpdate,
    service: InquiryServiceDep,
) -> dict[str, object]:
    return service.update_inquiry_comment(member_user.id, inquiry_id, comment_id, body)


@router.patch("/adminUser/reviews/{review_id}/comments", response_model=PageCommentSummary)
def admin_search_review_comments(
    admin_user: AdminUserDep, review_id: str, body: CommentRequest, service: InquiryServiceDep
) -> dict[str, object]:
    return service.search_review_comments(review_id, body, principal=admin_user)


@router.patch("/memberUser/reviews/{review_id}/comments", response_model=PageCommentSummary)
def member_search_review_comments(
    member_user: MemberUserDep, review_id: str, body: CommentRequest, service: InquiryServiceDep
) -> dict[str, object]:
    return service.search_review_comments(review_id, body, principal=member_user)


@router.patch("/sellerUser/reviews/{review_id}/comments", response_model=PageCommentSummary)
def seller_search_review_comments(
    seller_user: SellerUserDep, review_id: str, body: CommentRequest, service: InquiryServiceDep
) -> dict[str, object]:
    return service.search_review_comments(review_id, body, principal=seller_user)


@router.put("/adminUser/reviews/{review_id}/comments/{comment_id}", response_model=Comment)
def update_review_comment(
    admin_user: AdminUserDep,
    review_id: str,
    comment_id: str,
    body: CommentUpdate,
    service: InquiryServiceDep,
) -> dict[str, object]:
    return service.update_review_comment(review_id, comment_id, body)


@router.patch("/adminUser/sellerResponses", response_model=PageSellerResponseSummary)
def search_seller_responses(
    admin_user: AdminUserDep, body: SellerResponseRequest, service: InquiryServiceDep
) -> dict[str, object]:
    return service.search_seller_responses(body)


@router.put("/sellerUser/sellerResponses/{response_id}", response_model=SellerResponse)
def update_seller_response(
    seller_user: SellerUserDep,
    response_id: str,
    body: SellerResponseUpdate,
    service: InquiryServiceDep,
) -> dict[str, object]:
    return service.update_seller_response(seller_user.id, response_id, body)
