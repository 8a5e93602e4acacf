"""
证明材料 CRUD 操作
"""
from typing import List, Optional
from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.document import Document, DocumentStatus
from .base import CRUDBase


class CRUDDocument(CRUDBase[Document]):
    """证明材料 CRUD 操作类"""

    async def get_by_account(
        self,
        db: AsyncSession,
        account_id: str,
        *,
        verified_only: bool = False
    ) -> List[Document]:
        """获取某账户的材料"""
        query = select(self.model).where(self.model.account_id == account_id)
        if verified_only:
            query = query.where(self.model.is_verified == True)
        result = await db.execute(query.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())

    async def get_pending(self, db: AsyncSession) -> List[Document]:
        """待审核材料（先提交的在前）"""
        result = await db.execute(
            select(self.model)
            .where(self.model.status == DocumentStatus.PENDING.value)
            .order_by(self.model.created_at.asc())
        )
        return list(result.scalars().all())

    async def count_by_status(
        self,
        db: AsyncSession,
        status: str,
        *,
        verified_since: Optional[datetime] = None
    ) -> int:
        """按状态统计材料数"""
        query = select(func.count()).select_from(self.model).where(self.model.status == status)
        if verified_since is not None:
            query = query.where(self.model.verified_at >= verified_since)
        result = await db.execute(query)
        return result.scalar() or 0


document_crud = CRUDDocument(Document)
