"""
报价请求 CRUD 操作
"""
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.quote import QuoteRequest, OPEN_QUOTE_STATUSES
from .base import CRUDBase


class CRUDQuote(CRUDBase[QuoteRequest]):
    """报价请求 CRUD 操作类"""

    async def get_open_pair(
        self,
        db: AsyncSession,
        employer_id: str,
        candidate_id: str
    ) -> Optional[QuoteRequest]:
        """获取该 (雇主, 候选人) 进行中的请求（pending/approved）"""
        result = await db.execute(
            select(self.model).where(
                self.model.employer_id == employer_id,
                self.model.candidate_id == candidate_id,
                self.model.status.in_(OPEN_QUOTE_STATUSES),
            )
        )
        return result.scalars().first()

    async def get_owned_for_update(
        self,
        db: AsyncSession,
        id: str,
        employer_id: str
    ) -> Optional[QuoteRequest]:
        """获取并锁定某雇主名下的请求"""
        result = await db.execute(
            select(self.model)
            .where(self.model.id == id, self.model.employer_id == employer_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_by_employer(self, db: AsyncSession, employer_id: str) -> List[QuoteRequest]:
        """雇主的报价请求（新的在前）"""
        result = await db.execute(
            select(self.model)
            .where(self.model.employer_id == employer_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_all(self, db: AsyncSession, *, status: Optional[str] = None) -> List[QuoteRequest]:
        """全部报价请求（新的在前）"""
        query = select(self.model)
        if status:
            query = query.where(self.model.status == status)
        result = await db.execute(query.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())


quote_crud = CRUDQuote(QuoteRequest)
