"""
授权请求 CRUD 操作
"""
from typing import Optional, List
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.consent import ConsentRequest, ConsentStatus
from .base import CRUDBase


class CRUDConsent(CRUDBase[ConsentRequest]):
    """授权请求 CRUD 操作类"""

    async def get_pending_pair(
        self,
        db: AsyncSession,
        employer_id: str,
        candidate_id: str
    ) -> Optional[ConsentRequest]:
        """获取该 (雇主, 候选人) 的 pending 请求"""
        result = await db.execute(
            select(self.model).where(
                self.model.employer_id == employer_id,
                self.model.candidate_id == candidate_id,
                self.model.status == ConsentStatus.PENDING.value,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_candidate(self, db: AsyncSession, candidate_id: str) -> List[ConsentRequest]:
        """候选人收到的请求（新的在前）"""
        result = await db.execute(
            select(self.model)
            .where(self.model.candidate_id == candidate_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_employer(self, db: AsyncSession, employer_id: str) -> List[ConsentRequest]:
        """雇主发出的请求（新的在前）"""
        result = await db.execute(
            select(self.model)
            .where(self.model.employer_id == employer_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def count_pending_for_candidate(self, db: AsyncSession, candidate_id: str) -> int:
        """统计候选人待答复的请求数"""
        result = await db.execute(
            select(func.count())
            .select_from(self.model)
            .where(
                self.model.candidate_id == candidate_id,
                self.model.status == ConsentStatus.PENDING.value,
            )
        )
        return result.scalar() or 0


consent_crud = CRUDConsent(ConsentRequest)
