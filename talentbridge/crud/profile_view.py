"""
档案浏览记录 CRUD 操作
"""
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.profile_view import ProfileView
from .base import CRUDBase


class CRUDProfileView(CRUDBase[ProfileView]):
    """档案浏览记录 CRUD 操作类"""

    async def get_by_candidate(
        self,
        db: AsyncSession,
        candidate_id: str,
        *,
        limit: int = 50
    ) -> List[ProfileView]:
        """候选人档案的浏览记录（新的在前）"""
        result = await db.execute(
            select(self.model)
            .where(self.model.candidate_id == candidate_id)
            .order_by(self.model.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_for(
        self,
        db: AsyncSession,
        *,
        candidate_id: Optional[str] = None,
        employer_id: Optional[str] = None
    ) -> int:
        """统计浏览次数（按候选人或按雇主）"""
        query = select(func.count()).select_from(self.model)
        if candidate_id:
            query = query.where(self.model.candidate_id == candidate_id)
        if employer_id:
            query = query.where(self.model.employer_id == employer_id)
        result = await db.execute(query)
        return result.scalar() or 0


profile_view_crud = CRUDProfileView(ProfileView)
