"""
账户服务

负责注册、个人信息、候选人与雇主档案维护、运营审核以及账户目录
"""
from typing import Dict, Iterable, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ConflictException,
    conflict_on_integrity_error,
)
from talentbridge.core.security import Viewer
from talentbridge.crud import (
    account_crud,
    candidate_profile_crud,
    employer_profile_crud,
    demand_crud,
    quote_crud,
)
from talentbridge.models.account import (
    Account,
    CandidateProfile,
    EmployerProfile,
    Role,
    VerificationStatus,
    AccountCreate,
    AccountResponse,
    CandidateProfileUpdate,
    EmployerProfileUpdate,
    VerificationDecision,
    candidate_record,
    employer_record,
)
from . import audit
from .audit import AuditSink, AuditEventData


# CandidateProfileUpdate 中属于 Account 表的字段
ACCOUNT_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "nationality",
    "birth_date",
    "avatar_url",
    "sector",
    "years_of_experience",
)

# EmployerProfileUpdate 中属于 Account 表的字段（company_name 两边都写）
EMPLOYER_ACCOUNT_FIELDS = ("first_name", "last_name", "company_name")


def compute_profile_score(account: Account, profile: CandidateProfile) -> int:
    """档案完整度评分（0-100）"""
    score = 0
    if account.first_name and account.last_name:
        score += 10
    if profile.phone:
        score += 10
    if profile.address and profile.city:
        score += 10
    if profile.bio:
        score += 15
    if profile.skills:
        score += 20
    if profile.experience:
        score += 20
    if profile.education:
        score += 15
    return min(score, 100)


async def load_candidate_records(db: AsyncSession, candidate_ids: Iterable[str]) -> Dict[str, dict]:
    """批量组装候选人原始记录 {candidate_id: record}"""
    candidate_ids = set(candidate_ids)
    accounts = await account_crud.get_many(db, candidate_ids)
    profiles = await candidate_profile_crud.get_by_accounts(db, accounts.keys())
    return {
        account_id: candidate_record(account, profiles.get(account_id))
        for account_id, account in accounts.items()
    }


def account_record(account: Account) -> dict:
    """非候选人账户记录"""
    return AccountResponse.model_validate(account).model_dump(mode="json")


class AccountRegistry:
    """账户注册与审核"""

    def __init__(self, db: AsyncSession, audit_sink: AuditSink):
        self.db = db
        self.audit = audit_sink

    async def register(self, data: AccountCreate, viewer: Optional[Viewer] = None) -> dict:
        """
        注册账户

        候选人、雇主可自助注册；运营与管理员账户只能由管理员创建
        """
        if data.role in (Role.STAFF, Role.ADMIN):
            if viewer is None or viewer.role != Role.ADMIN:
                raise ForbiddenException("仅管理员可创建运营/管理员账户")

        if await account_crud.get_by_email(self.db, data.email):
            raise ConflictException(f"邮箱 '{data.email}' 已注册")

        values = data.model_dump()
        values["role"] = data.role.value
        if data.role in (Role.STAFF, Role.ADMIN):
            values["is_verified"] = True
            values["verification_status"] = VerificationStatus.VERIFIED.value

        with conflict_on_integrity_error(f"邮箱 '{data.email}' 已注册"):
            account = await account_crud.create(self.db, obj_in=values)

        profile = None
        if data.role == Role.CANDIDATE:
            profile = await candidate_profile_crud.create(
                self.db, obj_in={"account_id": account.id}
            )
        elif data.role == Role.EMPLOYER:
            profile = await employer_profile_crud.create(
                self.db, obj_in={"account_id": account.id, "company_name": account.company_name}
            )

        logger.info("账户已注册: id={}, role={}", account.id, account.role)
        return self._record(account, profile)

    async def me(self, viewer: Viewer) -> dict:
        """当前账户信息（候选人、雇主含档案）"""
        account = await account_crud.get(self.db, viewer.user_id)
        if not account:
            raise NotFoundException(f"账户不存在: {viewer.user_id}")
        return await self._load_record(account)

    async def get_account(self, account_id: str) -> dict:
        """运营查看任意账户（不脱敏）"""
        account = await account_crud.get(self.db, account_id)
        if not account:
            raise NotFoundException(f"账户不存在: {account_id}")
        return await self._load_record(account)

    async def get_employer(self, employer_id: str) -> dict:
        """雇主公开信息与公司档案"""
        account = await account_crud.get_with_role(self.db, employer_id, Role.EMPLOYER)
        if not account:
            raise NotFoundException(f"雇主不存在: {employer_id}")
        return await self._load_record(account)

    async def update_employer_profile(self, viewer: Viewer, data: EmployerProfileUpdate) -> dict:
        """
        雇主更新自己的公司档案

        姓名与公司名称写入账户，公司名称同时写入档案；未提交的字段保持不变
        """
        if not viewer.is_employer:
            raise ForbiddenException("仅雇主可编辑公司档案")

        account = await account_crud.get_for_update(self.db, viewer.user_id)
        if not account or account.role != Role.EMPLOYER.value:
            raise NotFoundException(f"雇主不存在: {viewer.user_id}")

        changes = data.model_dump(exclude_unset=True)
        account_changes = {k: changes.pop(k) for k in EMPLOYER_ACCOUNT_FIELDS if k in changes}
        if account_changes:
            account = await account_crud.update(self.db, db_obj=account, obj_in=account_changes)
        if "company_name" in account_changes:
            changes["company_name"] = account_changes["company_name"]

        profile = await employer_profile_crud.get_by_account(self.db, account.id)
        if profile is None:
            profile = await employer_profile_crud.create(
                self.db, obj_in={"account_id": account.id, "company_name": account.company_name}
            )
        if changes:
            profile = await employer_profile_crud.update(self.db, db_obj=profile, obj_in=changes)

        logger.info("雇主档案已更新: id={}", account.id)
        return employer_record(account, profile)

    async def update_candidate_profile(self, viewer: Viewer, data: CandidateProfileUpdate) -> dict:
        """候选人更新自己的档案，同时重算完整度"""
        if not viewer.is_candidate:
            raise ForbiddenException("仅候选人可编辑档案")

        account = await account_crud.get_for_update(self.db, viewer.user_id)
        if not account or account.role != Role.CANDIDATE.value:
            raise NotFoundException(f"候选人不存在: {viewer.user_id}")

        changes = data.model_dump(exclude_unset=True)
        account_changes = {k: changes.pop(k) for k in ACCOUNT_PROFILE_FIELDS if k in changes}
        if account_changes:
            account = await account_crud.update(self.db, db_obj=account, obj_in=account_changes)

        profile = await candidate_profile_crud.get_by_account(self.db, account.id)
        if profile is None:
            profile = await candidate_profile_crud.create(
                self.db, obj_in={"account_id": account.id}
            )
        for field, value in changes.items():
            setattr(profile, field, value)
        changes["profile_score"] = compute_profile_score(account, profile)
        profile = await candidate_profile_crud.update(self.db, db_obj=profile, obj_in=changes)

        logger.info("候选人档案已更新: id={}, score={}", account.id, profile.profile_score)
        return self._record(account, profile)

    async def request_verification(self, viewer: Viewer) -> dict:
        """提交审核申请: unverified/rejected -> pending"""
        if viewer.is_staff:
            raise ForbiddenException("运营/管理员账户无需审核")

        account = await account_crud.get_for_update(self.db, viewer.user_id)
        if not account:
            raise NotFoundException(f"账户不存在: {viewer.user_id}")
        if account.verification_status not in (
            VerificationStatus.UNVERIFIED.value,
            VerificationStatus.REJECTED.value,
        ):
            raise ConflictException(f"当前审核状态不可重新申请: {account.verification_status}")

        account = await account_crud.update(
            self.db,
            db_obj=account,
            obj_in={
                "verification_status": VerificationStatus.PENDING.value,
                "rejection_reason": None,
            },
        )
        logger.info("审核申请已提交: id={}", account.id)
        return await self._load_record(account)

    async def verify(self, viewer: Viewer, account_id: str, decision: VerificationDecision) -> dict:
        """
        运营审核账户

        候选人: 通过 -> verified；不通过且给出原因 -> rejected；否则 -> unverified
        雇主:   通过 -> verified；不通过 -> rejected
        """
        account = await account_crud.get_for_update(self.db, account_id)
        if not account or account.role not in (Role.CANDIDATE.value, Role.EMPLOYER.value):
            raise NotFoundException(f"候选人或雇主不存在: {account_id}")

        approved = decision.is_verified
        if account.role == Role.EMPLOYER.value:
            status = VerificationStatus.VERIFIED if approved else VerificationStatus.REJECTED
            action = audit.EMPLOYER_VERIFIED if approved else audit.EMPLOYER_REJECTED
            subject = account.company_name or account.email
            placement_cost = account.suggested_placement_cost
        else:
            if approved:
                status = VerificationStatus.VERIFIED
            elif decision.reason:
                status = VerificationStatus.REJECTED
            else:
                status = VerificationStatus.UNVERIFIED
            action = audit.USER_VERIFIED if approved else audit.USER_REJECTED
            subject = account.display_name or account.email
            placement_cost = decision.suggested_placement_cost if approved else None

        account = await account_crud.update(
            self.db,
            db_obj=account,
            obj_in={
                "is_verified": approved,
                "verification_status": status.value,
                "rejection_reason": None if approved else decision.reason,
                "suggested_placement_cost": placement_cost,
            },
        )

        details = f"{'Verified' if approved else 'Rejected'} {account.role}: {subject}"
        if placement_cost and approved:
            details += f" - Cost: {placement_cost}"
        if decision.reason:
            details += f" - Reason: {decision.reason}"
        await self.audit.emit(AuditEventData(action=action, actor_id=viewer.user_id, details=details))

        logger.info("账户审核完成: id={}, status={}", account.id, account.verification_status)
        return await self._load_record(account)

    async def set_badge(self, viewer: Viewer, account_id: str, badge_type: str) -> dict:
        """设置候选人徽章"""
        account = await account_crud.get_for_update(self.db, account_id)
        if not account or account.role != Role.CANDIDATE.value:
            raise NotFoundException(f"候选人不存在: {account_id}")
        account = await account_crud.update(self.db, db_obj=account, obj_in={"badge_type": badge_type})
        logger.info("徽章已更新: id={}, badge={}, by={}", account.id, badge_type, viewer.user_id)
        return await self._load_record(account)

    async def pending_employers(self) -> List[dict]:
        """等待审核的雇主"""
        employers = await account_crud.get_pending_employers(self.db)
        return [account_record(e) for e in employers]

    # ==================== 账户目录（运营/管理员） ====================

    async def list_employers(self) -> List[dict]:
        """全部雇主及公司档案（新注册的在前）"""
        employers = await account_crud.get_by_role(self.db, Role.EMPLOYER)
        profiles = await employer_profile_crud.get_by_accounts(self.db, (e.id for e in employers))
        return [employer_record(e, profiles.get(e.id)) for e in employers]

    async def list_workers(self) -> List[dict]:
        """全部候选人及职业档案（新注册的在前，不脱敏）"""
        workers = await account_crud.get_by_role(self.db, Role.CANDIDATE)
        profiles = await candidate_profile_crud.get_by_accounts(self.db, (w.id for w in workers))
        return [candidate_record(w, profiles.get(w.id)) for w in workers]

    async def list_users(self) -> List[dict]:
        """全部账户，不含档案"""
        return [account_record(a) for a in await account_crud.get_by_role(self.db)]

    async def platform_stats(self) -> Dict[str, int]:
        """平台总览计数"""
        return {
            "total_users": await account_crud.count(self.db),
            "total_employers": await account_crud.count_by_role(self.db, Role.EMPLOYER),
            "total_workers": await account_crud.count_by_role(self.db, Role.CANDIDATE),
            "total_demands": await demand_crud.count(self.db),
            "total_quotes": await quote_crud.count(self.db),
        }

    async def _load_record(self, account: Account) -> dict:
        """按角色加载档案后组装记录"""
        profile = None
        if account.role == Role.CANDIDATE.value:
            profile = await candidate_profile_crud.get_by_account(self.db, account.id)
        elif account.role == Role.EMPLOYER.value:
            profile = await employer_profile_crud.get_by_account(self.db, account.id)
        return self._record(account, profile)

    def _record(
        self,
        account: Account,
        profile: Optional[CandidateProfile | EmployerProfile] = None
    ) -> dict:
        if account.role == Role.CANDIDATE.value:
            return candidate_record(account, profile)
        if account.role == Role.EMPLOYER.value:
            return employer_record(account, profile)
        return account_record(account)
