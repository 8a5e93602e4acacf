"""
人才库服务

雇主浏览候选人（脱敏），查看单个候选人时记录浏览；
候选人可查看自己被哪些雇主浏览过
"""
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.exceptions import NotFoundException, ForbiddenException
from talentbridge.core.security import Viewer
from talentbridge.crud import (
    account_crud,
    candidate_profile_crud,
    consent_crud,
    pipeline_crud,
    profile_view_crud,
)
from talentbridge.models.account import Role, candidate_record
from talentbridge.models.profile_view import ProfileViewResponse
from .anonymization import project_candidate
from .documents import DocumentRegistry


def parse_skill_filter(skills: Optional[str]) -> List[str]:
    """拆分技能筛选词: 'Python, sql ' -> ['python', 'sql']"""
    if not skills:
        return []
    return [s.strip().lower() for s in skills.split(",") if s.strip()]


def matches_skills(record: dict, wanted: List[str]) -> bool:
    """任一档案技能包含任一筛选词（不区分大小写）"""
    if not wanted:
        return True
    profile = record.get("candidate_profile") or {}
    skills = [str(s).lower() for s in profile.get("skills") or []]
    return any(term in skill for skill in skills for term in wanted)


class TalentPool:
    """候选人浏览与曝光记录"""

    def __init__(self, db: AsyncSession, documents: DocumentRegistry):
        self.db = db
        self.documents = documents

    async def browse(
        self,
        viewer: Viewer,
        *,
        verified_only: bool = False,
        skills: Optional[str] = None
    ) -> List[dict]:
        """
        浏览候选人

        未通过审核的雇主得到空列表
        """
        if viewer.is_candidate:
            raise ForbiddenException("候选人不能浏览人才库")
        if viewer.is_employer and not await self._employer_verified(viewer.user_id):
            return []

        candidates = await account_crud.get_candidates(self.db, verified_only=verified_only)
        profiles = await candidate_profile_crud.get_by_accounts(self.db, (c.id for c in candidates))
        wanted = parse_skill_filter(skills)

        items = []
        for candidate in candidates:
            record = candidate_record(candidate, profiles.get(candidate.id))
            if matches_skills(record, wanted):
                items.append(project_candidate(viewer, record))
        return items

    async def get_candidate(self, viewer: Viewer, candidate_id: str) -> dict:
        """
        查看单个候选人

        雇主须已通过审核，且会记录一次浏览；非雇主额外返回已核验材料
        """
        if viewer.is_candidate and not viewer.is_self(candidate_id):
            raise ForbiddenException("候选人只能查看自己的档案")
        if viewer.is_employer and not await self._employer_verified(viewer.user_id):
            raise ForbiddenException("雇主账户须通过审核后才能查看候选人")

        candidate = await account_crud.get_with_role(self.db, candidate_id, Role.CANDIDATE)
        if not candidate:
            raise NotFoundException(f"候选人不存在: {candidate_id}")
        profile = await candidate_profile_crud.get_by_account(self.db, candidate_id)

        documents = []
        if viewer.is_employer:
            await profile_view_crud.create(self.db, obj_in={
                "candidate_id": candidate_id,
                "employer_id": viewer.user_id,
            })
            logger.info("档案浏览已记录: candidate={}, employer={}", candidate_id, viewer.user_id)
        else:
            documents = await self.documents.verified_for_candidate(candidate_id)

        return {
            "candidate": project_candidate(viewer, candidate_record(candidate, profile)),
            "documents": documents,
        }

    async def views(self, viewer: Viewer, candidate_id: str) -> List[dict]:
        """候选人查看自己的被浏览记录（新的在前）"""
        if not viewer.is_self(candidate_id) and not viewer.is_staff:
            raise ForbiddenException("只能查看自己的浏览记录")

        views = await profile_view_crud.get_by_candidate(self.db, candidate_id)
        employers = await account_crud.get_many(self.db, (v.employer_id for v in views))
        items = []
        for view in views:
            item = ProfileViewResponse.model_validate(view)
            employer = employers.get(view.employer_id)
            if employer:
                item.employer = {
                    "id": employer.id,
                    "email": employer.email,
                    "company_name": employer.company_name,
                }
            items.append(item.model_dump(mode="json"))
        return items

    async def dashboard_stats(self, viewer: Viewer) -> dict:
        """个人工作台统计"""
        if viewer.is_candidate:
            profile = await candidate_profile_crud.get_by_account(self.db, viewer.user_id)
            return {
                "profile_views": await profile_view_crud.count_for(self.db, candidate_id=viewer.user_id),
                "consent_requests": await consent_crud.count_pending_for_candidate(self.db, viewer.user_id),
                "profile_score": profile.profile_score if profile else 0,
            }
        if viewer.is_employer:
            return {
                "pipeline_candidates": await pipeline_crud.count_by_employer(self.db, viewer.user_id),
                "profile_views": await profile_view_crud.count_for(self.db, employer_id=viewer.user_id),
            }
        return {}

    async def _employer_verified(self, employer_id: str) -> bool:
        employer = await account_crud.get_with_role(self.db, employer_id, Role.EMPLOYER)
        return bool(employer and employer.is_verified)
