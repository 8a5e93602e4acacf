"""
账户与候选人档案 CRUD 操作
"""
from typing import Optional, List, Dict, Iterable
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.account import Account, CandidateProfile, EmployerProfile, Role, VerificationStatus
from .base import CRUDBase


class CRUDAccount(CRUDBase[Account]):
    """账户 CRUD 操作类"""

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[Account]:
        """根据邮箱查找"""
        result = await db.execute(
            select(self.model).where(self.model.email == email)
        )
        return result.scalar_one_or_none()

    async def get_with_role(
        self,
        db: AsyncSession,
        id: str,
        role: Role
    ) -> Optional[Account]:
        """获取指定角色的账户，角色不符视为不存在"""
        result = await db.execute(
            select(self.model).where(self.model.id == id, self.model.role == role.value)
        )
        return result.scalar_one_or_none()

    async def get_candidates(
        self,
        db: AsyncSession,
        *,
        verified_only: bool = False,
        ids: Optional[Iterable[str]] = None
    ) -> List[Account]:
        """获取候选人账户列表"""
        query = select(self.model).where(self.model.role == Role.CANDIDATE.value)
        if verified_only:
            query = query.where(self.model.is_verified == True)
        if ids is not None:
            query = query.where(self.model.id.in_(list(ids)))
        result = await db.execute(query.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())

    async def get_by_role(self, db: AsyncSession, role: Optional[Role] = None) -> List[Account]:
        """按角色列出账户（新的在前），不传角色时列出全部"""
        query = select(self.model)
        if role is not None:
            query = query.where(self.model.role == role.value)
        result = await db.execute(query.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())

    async def count_by_role(self, db: AsyncSession, role: Role) -> int:
        """按角色统计账户数"""
        result = await db.execute(
            select(func.count()).select_from(self.model).where(self.model.role == role.value)
        )
        return result.scalar() or 0

    async def get_pending_employers(self, db: AsyncSession) -> List[Account]:
        """获取待审核的雇主"""
        result = await db.execute(
            select(self.model)
            .where(
                self.model.role == Role.EMPLOYER.value,
                self.model.verification_status == VerificationStatus.PENDING.value,
            )
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())


class CRUDCandidateProfile(CRUDBase[CandidateProfile]):
    """候选人档案 CRUD 操作类"""

    async def get_by_account(
        self,
        db: AsyncSession,
        account_id: str
    ) -> Optional[CandidateProfile]:
        """获取某账户的档案（1:1关系）"""
        result = await db.execute(
            select(self.model).where(self.model.account_id == account_id)
        )
        return result.scalar_one_or_none()

    async def get_by_accounts(
        self,
        db: AsyncSession,
        account_ids: Iterable[str]
    ) -> Dict[str, CandidateProfile]:
        """批量获取档案，返回 {account_id: 档案}"""
        account_ids = {i for i in account_ids if i}
        if not account_ids:
            return {}
        result = await db.execute(
            select(self.model).where(self.model.account_id.in_(account_ids))
        )
        return {p.account_id: p for p in result.scalars().all()}


class CRUDEmployerProfile(CRUDBase[EmployerProfile]):
    """雇主档案 CRUD 操作类"""

    async def get_by_account(self, db: AsyncSession, account_id: str) -> Optional[EmployerProfile]:
        result = await db.execute(
            select(self.model).where(self.model.account_id == account_id)
        )
        return result.scalar_one_or_none()

    async def get_by_accounts(
        self,
        db: AsyncSession,
        account_ids: Iterable[str]
    ) -> Dict[str, EmployerProfile]:
        """批量获取雇主档案，返回 {account_id: 档案}"""
        account_ids = {i for i in account_ids if i}
        if not account_ids:
            return {}
        result = await db.execute(
            select(self.model).where(self.model.account_id.in_(account_ids))
        )
        return {p.account_id: p for p in result.scalars().all()}


account_crud = CRUDAccount(Account)
candidate_profile_crud = CRUDCandidateProfile(CandidateProfile)
employer_profile_crud = CRUDEmployerProfile(EmployerProfile)
