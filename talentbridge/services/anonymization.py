"""
候选人数据匿名化模块

所有面向读取方的候选人数据都经过 project_candidate() 按查看者角色投影:
    employer         -> anonymize()（脱敏）
    candidate/staff/admin -> 原样返回

anonymize() 为纯函数且幂等，不修改入参
"""
import copy
from typing import Callable, Dict, Optional

from talentbridge.core.config import settings
from talentbridge.core.security import Viewer
from talentbridge.models.account import Account, Role


# 顶层需移除的敏感字段
REMOVED_FIELDS = ("password", "password_hash", "avatar_url", "address", "nationality", "birth_date")

# candidate_profile 内需移除的字段
REMOVED_PROFILE_FIELDS = ("phone", "address", "city", "country")


def anonymize(record: Optional[dict], masked_email: Optional[str] = None) -> Optional[dict]:
    """
    候选人记录脱敏

    - full_name 由姓名拼接，拼接为空时为 "Candidate"
    - email 替换为固定占位邮箱
    - 移除头像、地址、国籍、出生日期及档案中的联系方式
    - 技能、经历、教育、认证标记保持不变
    """
    if record is None:
        return None

    masked = copy.deepcopy(record)
    masked["full_name"] = (
        f"{masked.get('first_name') or ''} {masked.get('last_name') or ''}".strip()
        or "Candidate"
    )
    masked["email"] = masked_email or settings.masked_email

    for key in REMOVED_FIELDS:
        masked.pop(key, None)

    profile = masked.get("candidate_profile")
    if isinstance(profile, dict):
        for key in REMOVED_PROFILE_FIELDS:
            profile.pop(key, None)

    return masked


def _identity(record: Optional[dict]) -> Optional[dict]:
    return record


# 角色 -> 候选人投影策略
CANDIDATE_PROJECTIONS: Dict[Role, Callable[[Optional[dict]], Optional[dict]]] = {
    Role.EMPLOYER: anonymize,
    Role.CANDIDATE: _identity,
    Role.STAFF: _identity,
    Role.ADMIN: _identity,
}


def project_candidate(viewer: Viewer, record: Optional[dict]) -> Optional[dict]:
    """按查看者角色投影候选人记录"""
    return CANDIDATE_PROJECTIONS[viewer.role](record)


# ==================== 面试视图投影 ====================

def _interview_candidate_brief(account: Optional[Account]) -> Optional[dict]:
    if account is None:
        return None
    return {
        "id": account.id,
        "first_name": account.first_name,
        "last_name": account.last_name,
        "avatar_url": account.avatar_url,
    }


def _interview_employer_brief(account: Optional[Account]) -> Optional[dict]:
    if account is None:
        return None
    return {
        "id": account.id,
        "first_name": account.first_name,
        "last_name": account.last_name,
        "company_name": account.company_name,
    }


def _employer_name(employer: Optional[Account]) -> str:
    if employer is None:
        return "Unknown"
    return employer.company_name or employer.first_name or "Unknown"


def _project_interview_for_employer(candidate: Optional[Account]) -> dict:
    brief = _interview_candidate_brief(candidate)
    if brief is None:
        name = "Unknown"
    else:
        brief.pop("avatar_url", None)
        name = candidate.display_name or "Candidate"
    return {"candidate": brief, "candidate_name": name}


def _project_interview_in_full(candidate: Optional[Account]) -> dict:
    brief = _interview_candidate_brief(candidate)
    if brief is None:
        return {"candidate": None, "candidate_name": "Unknown", "candidate_avatar": None}
    return {
        "candidate": brief,
        "candidate_name": candidate.display_name or "Unknown",
        "candidate_avatar": candidate.avatar_url,
    }


# 角色 -> 面试中候选人部分的投影策略
INTERVIEW_PROJECTIONS: Dict[Role, Callable[[Optional[Account]], dict]] = {
    Role.EMPLOYER: _project_interview_for_employer,
    Role.CANDIDATE: _project_interview_in_full,
    Role.STAFF: _project_interview_in_full,
    Role.ADMIN: _project_interview_in_full,
}


def project_interview_parties(
    viewer: Viewer,
    candidate: Optional[Account],
    employer: Optional[Account]
) -> dict:
    """
    面试视图的派生字段

    返回 candidate_name / employer_name / candidate_avatar / candidate / employer，
    雇主视角下整个载荷不含候选人头像
    """
    fields = INTERVIEW_PROJECTIONS[viewer.role](candidate)
    fields["employer"] = _interview_employer_brief(employer)
    fields["employer_name"] = _employer_name(employer)
    return fields
