"""
证明材料服务

候选人登记文件地址，运营审核通过或驳回
"""
from datetime import datetime, time
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.exceptions import NotFoundException, ForbiddenException, ConflictException
from talentbridge.core.security import Viewer
from talentbridge.crud import account_crud, document_crud
from talentbridge.models.account import Role
from talentbridge.models.base import utcnow
from talentbridge.models.document import Document, DocumentCreate, DocumentStatus, DocumentResponse
from . import audit
from .accounts import account_record
from .audit import AuditSink, AuditEventData


def document_record(document: Document) -> dict:
    return DocumentResponse.model_validate(document).model_dump(mode="json")


class DocumentRegistry:
    """证明材料登记与审核"""

    def __init__(self, db: AsyncSession, audit_sink: AuditSink):
        self.db = db
        self.audit = audit_sink

    async def register(self, viewer: Viewer, data: DocumentCreate) -> Document:
        """候选人登记材料"""
        if not viewer.is_candidate:
            raise ForbiddenException("仅候选人可提交材料")
        if not await account_crud.get_with_role(self.db, viewer.user_id, Role.CANDIDATE):
            raise NotFoundException(f"候选人不存在: {viewer.user_id}")

        document = await document_crud.create(self.db, obj_in={
            "account_id": viewer.user_id,
            "type": data.type.value,
            "name": data.name or data.type.value,
            "file_url": data.file_url,
        })
        logger.info("材料已登记: id={}, account={}, type={}", document.id, viewer.user_id, document.type)
        return document

    async def list_mine(self, viewer: Viewer) -> List[dict]:
        documents = await document_crud.get_by_account(self.db, viewer.user_id)
        return [document_record(d) for d in documents]

    async def list_pending(self) -> List[dict]:
        """待审核材料，附提交人信息"""
        documents = await document_crud.get_pending(self.db)
        owners = await account_crud.get_many(self.db, (d.account_id for d in documents))
        items = []
        for document in documents:
            item = document_record(document)
            owner = owners.get(document.account_id)
            item["account"] = account_record(owner) if owner else None
            items.append(item)
        return items

    async def list_for_candidate(self, candidate_id: str) -> dict:
        """某候选人的全部材料（运营审核页）"""
        candidate = await account_crud.get_with_role(self.db, candidate_id, Role.CANDIDATE)
        if not candidate:
            raise NotFoundException(f"候选人不存在: {candidate_id}")
        documents = await document_crud.get_by_account(self.db, candidate_id)
        return {
            "candidate": account_record(candidate),
            "documents": [document_record(d) for d in documents],
        }

    async def verified_for_candidate(self, candidate_id: str) -> List[dict]:
        documents = await document_crud.get_by_account(self.db, candidate_id, verified_only=True)
        return [document_record(d) for d in documents]

    async def approve(self, viewer: Viewer, document_id: str) -> Document:
        """审核通过"""
        document = await self._load_pending(document_id)
        document = await document_crud.update(self.db, db_obj=document, obj_in={
            "status": DocumentStatus.VERIFIED.value,
            "is_verified": True,
            "verified_by": viewer.user_id,
            "verified_at": utcnow(),
            "rejection_reason": None,
        })
        await self.audit.emit(AuditEventData(
            action=audit.DOCUMENT_APPROVED,
            actor_id=viewer.user_id,
            details=f"Approved document: {document.name}",
        ))
        logger.info("材料审核通过: id={}, by={}", document.id, viewer.user_id)
        return document

    async def reject(self, viewer: Viewer, document_id: str, reason: Optional[str] = None) -> Document:
        """驳回"""
        document = await self._load_pending(document_id)
        document = await document_crud.update(self.db, db_obj=document, obj_in={
            "status": DocumentStatus.REJECTED.value,
            "is_verified": False,
            "verified_by": viewer.user_id,
            "rejection_reason": reason,
        })
        details = f"Rejected document: {document.name}"
        if reason:
            details += f" - {reason}"
        await self.audit.emit(AuditEventData(
            action=audit.DOCUMENT_REJECTED,
            actor_id=viewer.user_id,
            details=details,
        ))
        logger.info("材料已驳回: id={}, by={}", document.id, viewer.user_id)
        return document

    async def stats(self) -> dict:
        """运营工作台统计"""
        now = utcnow()
        today = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
        return {
            "pending_reviews": await document_crud.count_by_status(self.db, DocumentStatus.PENDING.value),
            "approved_today": await document_crud.count_by_status(
                self.db, DocumentStatus.VERIFIED.value, verified_since=today
            ),
            "rejected_documents": await document_crud.count_by_status(self.db, DocumentStatus.REJECTED.value),
            "total_candidates": await account_crud.count_by_role(self.db, Role.CANDIDATE),
        }

    async def _load_pending(self, document_id: str) -> Document:
        document = await document_crud.get_for_update(self.db, document_id)
        if not document:
            raise NotFoundException(f"材料不存在: {document_id}")
        if document.status != DocumentStatus.PENDING.value:
            raise ConflictException(f"材料已审核: {document.status}")
        return document
