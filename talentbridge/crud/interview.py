"""
面试会议 CRUD 操作
"""
from typing import Optional, List
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.interview import InterviewMeeting
from .base import CRUDBase


class CRUDInterview(CRUDBase[InterviewMeeting]):
    """面试会议 CRUD 操作类"""

    async def get_by_party(
        self,
        db: AsyncSession,
        user_id: str,
        *,
        status: Optional[str] = None
    ) -> List[InterviewMeeting]:
        """获取用户作为雇主或候选人参与的面试（新的在前）"""
        query = select(self.model).where(
            or_(self.model.employer_id == user_id, self.model.candidate_id == user_id)
        )
        if status:
            query = query.where(self.model.status == status)
        result = await db.execute(query.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())

    async def get_all(self, db: AsyncSession, *, status: Optional[str] = None) -> List[InterviewMeeting]:
        """全部面试（新的在前）"""
        query = select(self.model)
        if status:
            query = query.where(self.model.status == status)
        result = await db.execute(query.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())


interview_crud = CRUDInterview(InterviewMeeting)
