"""
运营后台 API 路由

所有接口限运营与管理员
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.database import get_db
from talentbridge.core.response import (
    success_response,
    list_response,
    ResponseModel,
    ListResponseModel,
    DictResponse,
)
from talentbridge.core.security import Viewer, require_roles
from talentbridge.crud import audit_crud
from talentbridge.models.account import Role, VerificationDecision, BadgeUpdate
from talentbridge.models.audit import AuditEventResponse
from talentbridge.models.document import DocumentReview, DocumentResponse
from talentbridge.api.deps import get_account_registry, get_document_registry, get_pipeline_tracker
from talentbridge.services import AccountRegistry, DocumentRegistry, PipelineTracker

router = APIRouter()

staff_only = require_roles(Role.STAFF, Role.ADMIN)


@router.get("/stats", summary="运营工作台统计", response_model=DictResponse)
async def get_staff_stats(
    viewer: Viewer = Depends(staff_only),
    documents: DocumentRegistry = Depends(get_document_registry),
):
    return success_response(data=await documents.stats())


@router.get("/platform-stats", summary="平台总览统计", response_model=DictResponse)
async def get_platform_stats(
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    账户、雇主、候选人、人才需求与报价请求的总数
    """
    return success_response(data=await registry.platform_stats())


# ==================== 账户目录 ====================

@router.get("/employers", summary="全部雇主", response_model=ListResponseModel[dict])
async def get_employers(
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    全部雇主，附公司档案（新注册的在前）
    """
    return list_response(await registry.list_employers())


@router.get("/workers", summary="全部候选人", response_model=ListResponseModel[dict])
async def get_workers(
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    全部候选人，附职业档案（新注册的在前，不脱敏）
    """
    return list_response(await registry.list_workers())


@router.get("/users", summary="全部账户", response_model=ListResponseModel[dict])
async def get_users(
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    return list_response(await registry.list_users())


# ==================== 账户审核 ====================

@router.get("/pending-employers", summary="待审核雇主", response_model=ListResponseModel[dict])
async def get_pending_employers(
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    return list_response(await registry.pending_employers())


@router.get("/accounts/{account_id}", summary="查看账户", response_model=ResponseModel[dict])
async def get_account(
    account_id: str,
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    查看任意账户（不脱敏）
    """
    return success_response(data=await registry.get_account(account_id))


@router.put("/accounts/{account_id}/verify", summary="审核账户", response_model=ResponseModel[dict])
async def verify_account(
    account_id: str,
    data: VerificationDecision,
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    审核候选人或雇主
    """
    account = await registry.verify(viewer, account_id, data)
    return success_response(data=account, message="审核完成")


@router.patch("/accounts/{account_id}/badge", summary="设置候选人徽章", response_model=ResponseModel[dict])
async def set_badge(
    account_id: str,
    data: BadgeUpdate,
    viewer: Viewer = Depends(staff_only),
    registry: AccountRegistry = Depends(get_account_registry),
):
    account = await registry.set_badge(viewer, account_id, data.badge_type)
    return success_response(data=account, message="徽章已更新")


# ==================== 材料审核 ====================

@router.get("/pending-reviews", summary="待审核材料", response_model=ListResponseModel[dict])
async def get_pending_reviews(
    viewer: Viewer = Depends(staff_only),
    documents: DocumentRegistry = Depends(get_document_registry),
):
    return list_response(await documents.list_pending())


@router.get("/reviews/{candidate_id}", summary="候选人材料", response_model=DictResponse)
async def get_candidate_reviews(
    candidate_id: str,
    viewer: Viewer = Depends(staff_only),
    documents: DocumentRegistry = Depends(get_document_registry),
):
    return success_response(data=await documents.list_for_candidate(candidate_id))


@router.put("/documents/{document_id}/approve", summary="材料审核通过", response_model=ResponseModel[DocumentResponse])
async def approve_document(
    document_id: str,
    viewer: Viewer = Depends(staff_only),
    documents: DocumentRegistry = Depends(get_document_registry),
):
    document = await documents.approve(viewer, document_id)
    return success_response(
        data=DocumentResponse.model_validate(document).model_dump(),
        message="材料已通过"
    )


@router.put("/documents/{document_id}/reject", summary="驳回材料", response_model=ResponseModel[DocumentResponse])
async def reject_document(
    document_id: str,
    data: DocumentReview,
    viewer: Viewer = Depends(staff_only),
    documents: DocumentRegistry = Depends(get_document_registry),
):
    document = await documents.reject(viewer, document_id, data.reason)
    return success_response(
        data=DocumentResponse.model_validate(document).model_dump(),
        message="材料已驳回"
    )


# ==================== 管道与审计 ====================

@router.get("/relations", summary="全部管道关系", response_model=ListResponseModel[dict])
async def get_all_relations(
    viewer: Viewer = Depends(staff_only),
    pipeline: PipelineTracker = Depends(get_pipeline_tracker),
):
    """
    所有雇主-候选人关系，附雇主名称
    """
    return list_response(await pipeline.list_all(viewer))


@router.get("/audit-events", summary="审计事件", response_model=ListResponseModel[AuditEventResponse])
async def get_audit_events(
    action: Optional[str] = Query(None, description="按动作筛选"),
    actor_id: Optional[str] = Query(None, description="按操作人筛选"),
    limit: int = Query(100, ge=1, le=500, description="返回条数"),
    viewer: Viewer = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    """
    最近的审计事件（新的在前）
    """
    events = await audit_crud.get_recent(db, action=action, actor_id=actor_id, limit=limit)
    return list_response([AuditEventResponse.model_validate(e).model_dump() for e in events])
