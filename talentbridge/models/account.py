"""
账户与候选人档案模型模块 - SQLModel 版本

Account 是所有参与方（候选人、雇主、运营、管理员）的统一身份记录，
CandidateProfile 存放候选人的职业档案，以 candidate_profile 嵌入候选人记录；
EmployerProfile 存放雇主的公司档案，以 employer_profile 嵌入雇主记录
"""
from typing import Optional, List, Literal
from enum import Enum
from sqlmodel import Field, Column, JSON

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class Role(str, Enum):
    """账户角色枚举"""
    CANDIDATE = "candidate"
    EMPLOYER = "employer"
    STAFF = "staff"
    ADMIN = "admin"


class VerificationStatus(str, Enum):
    """身份审核状态枚举"""
    UNVERIFIED = "unverified"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


# ==================== 基础字段定义 ====================

class AccountBase(SQLModelBase):
    """账户基础字段"""
    email: str = Field(..., min_length=3, max_length=255, description="登录邮箱")
    first_name: Optional[str] = Field(None, max_length=100, description="名")
    last_name: Optional[str] = Field(None, max_length=100, description="姓")
    company_name: Optional[str] = Field(None, max_length=200, description="公司名称(雇主)")
    nationality: Optional[str] = Field(None, max_length=100, description="国籍")
    birth_date: Optional[str] = Field(None, max_length=20, description="出生日期")
    avatar_url: Optional[str] = Field(None, max_length=500, description="头像地址")
    address: Optional[str] = Field(None, description="通讯地址")
    sector: Optional[str] = Field(None, max_length=100, description="行业方向")
    years_of_experience: Optional[str] = Field(None, max_length=50, description="工作年限")


# ==================== 表模型 ====================

class Account(AccountBase, TimestampMixin, IDMixin, table=True):
    """账户表模型"""
    __tablename__ = "accounts"

    email: str = Field(..., max_length=255, unique=True, index=True, description="登录邮箱")
    role: str = Field(..., index=True, description="角色")
    is_verified: bool = Field(default=False, index=True, description="是否已审核通过")
    verification_status: str = Field(
        default=VerificationStatus.UNVERIFIED.value,
        index=True,
        description="审核状态"
    )
    badge_type: str = Field(default="none", description="徽章: gold/blue/none")
    suggested_placement_cost: Optional[str] = Field(None, description="运营建议的安置费用")
    rejection_reason: Optional[str] = Field(None, description="驳回原因")

    @property
    def display_name(self) -> str:
        """展示名（姓名拼接）"""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, role={self.role})>"


class CandidateProfile(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """候选人档案表模型（1:1 关联 Account）"""
    __tablename__ = "candidate_profiles"

    account_id: str = Field(
        ...,
        foreign_key="accounts.id",
        unique=True,
        index=True,
        description="候选人账户ID"
    )
    phone: Optional[str] = Field(None, description="电话")
    address: Optional[str] = Field(None, description="地址")
    city: Optional[str] = Field(None, description="城市")
    country: Optional[str] = Field(None, description="国家")
    bio: Optional[str] = Field(None, description="个人简介")
    headline: Optional[str] = Field(None, description="一句话介绍")
    location: Optional[str] = Field(None, description="期望工作地点")
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="技能")
    experience: List[dict] = Field(default_factory=list, sa_column=Column(JSON), description="工作经历")
    education: List[dict] = Field(default_factory=list, sa_column=Column(JSON), description="教育经历")
    languages: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="语言")
    profile_score: int = Field(0, ge=0, le=100, description="档案完整度(0-100)")

    def __repr__(self) -> str:
        return f"<CandidateProfile(account_id={self.account_id})>"


class EmployerProfile(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """雇主公司档案表模型（1:1 关联 Account）"""
    __tablename__ = "employer_profiles"

    account_id: str = Field(
        ...,
        foreign_key="accounts.id",
        unique=True,
        index=True,
        description="雇主账户ID"
    )
    company_name: Optional[str] = Field(None, max_length=200, description="公司名称")
    company_description: Optional[str] = Field(None, description="公司介绍")
    website: Optional[str] = Field(None, max_length=500, description="官网")
    phone: Optional[str] = Field(None, description="电话")
    address: Optional[str] = Field(None, description="地址")
    city: Optional[str] = Field(None, description="城市")
    country: Optional[str] = Field(None, description="国家")
    industry: Optional[str] = Field(None, description="行业")
    company_size: Optional[str] = Field(None, description="公司规模")
    vision: Optional[str] = Field(None, description="愿景")
    founded_year: Optional[int] = Field(None, ge=1800, le=2100, description="成立年份")
    contact_email: Optional[str] = Field(None, max_length=255, description="联系邮箱")
    society_type: Optional[str] = Field(None, description="公司类型，如 GmbH")
    register_number: Optional[str] = Field(None, description="商业登记号")
    is_training_company: bool = Field(default=False, description="是否为培训企业")

    def __repr__(self) -> str:
        return f"<EmployerProfile(account_id={self.account_id})>"


# ==================== 请求 Schema ====================

class AccountCreate(AccountBase):
    """注册账户请求"""
    role: Role = Field(..., description="角色")


class CandidateProfileUpdate(SQLModelBase):
    """更新候选人档案请求 - 所有字段可选"""
    # 账户字段
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    nationality: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[str] = Field(None, max_length=20)
    avatar_url: Optional[str] = Field(None, max_length=500)
    sector: Optional[str] = Field(None, max_length=100)
    years_of_experience: Optional[str] = Field(None, max_length=50)
    # 档案字段
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    bio: Optional[str] = None
    headline: Optional[str] = None
    location: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[List[dict]] = None
    education: Optional[List[dict]] = None
    languages: Optional[List[str]] = None


class EmployerProfileUpdate(SQLModelBase):
    """更新雇主档案请求 - 所有字段可选"""
    # 账户字段
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    company_name: Optional[str] = Field(None, max_length=200)
    # 档案字段
    company_description: Optional[str] = None
    website: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    vision: Optional[str] = None
    founded_year: Optional[int] = Field(None, ge=1800, le=2100)
    contact_email: Optional[str] = Field(None, max_length=255)
    society_type: Optional[str] = None
    register_number: Optional[str] = None
    is_training_company: Optional[bool] = None


class VerificationDecision(SQLModelBase):
    """运营审核决定"""
    is_verified: bool = Field(..., description="是否通过")
    reason: Optional[str] = Field(None, description="驳回原因")
    suggested_placement_cost: Optional[str] = Field(None, description="建议安置费用(候选人)")


class BadgeUpdate(SQLModelBase):
    """设置徽章"""
    badge_type: Literal["gold", "blue", "none"] = Field(..., description="徽章类型")


# ==================== 响应 Schema ====================

class CandidateProfileResponse(SQLModelBase):
    """候选人档案响应"""
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    bio: Optional[str] = None
    headline: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = []
    experience: List[dict] = []
    education: List[dict] = []
    languages: List[str] = []
    profile_score: int = 0


class EmployerProfileResponse(SQLModelBase):
    """雇主档案响应"""
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    vision: Optional[str] = None
    founded_year: Optional[int] = None
    contact_email: Optional[str] = None
    society_type: Optional[str] = None
    register_number: Optional[str] = None
    is_training_company: bool = False


class AccountResponse(TimestampResponse):
    """账户详情响应"""
    email: str
    role: str
    first_name: Optional[str]
    last_name: Optional[str]
    company_name: Optional[str]
    nationality: Optional[str]
    birth_date: Optional[str]
    avatar_url: Optional[str]
    address: Optional[str]
    sector: Optional[str]
    years_of_experience: Optional[str]
    is_verified: bool
    verification_status: str
    badge_type: str
    suggested_placement_cost: Optional[str] = None
    rejection_reason: Optional[str] = None
    candidate_profile: Optional[CandidateProfileResponse] = None


def candidate_record(account: Account, profile: Optional[CandidateProfile] = None) -> dict:
    """
    组装候选人原始记录（未脱敏）

    所有面向读取方的候选人数据都从这里出发，再按查看者角色投影
    """
    record = AccountResponse.model_validate(account).model_dump(mode="json")
    record["candidate_profile"] = (
        CandidateProfileResponse.model_validate(profile).model_dump(mode="json")
        if profile is not None else None
    )
    return record


def employer_record(account: Account, profile: Optional[EmployerProfile] = None) -> dict:
    """雇主记录，附公司档案"""
    record = AccountResponse.model_validate(account).model_dump(mode="json")
    record.pop("candidate_profile", None)
    record["employer_profile"] = (
        EmployerProfileResponse.model_validate(profile).model_dump(mode="json")
        if profile is not None else None
    )
    return record


def party_brief(account: Optional[Account]) -> Optional[dict]:
    """雇主等非候选人方的简要信息"""
    if account is None:
        return None
    return {
        "id": account.id,
        "email": account.email,
        "first_name": account.first_name,
        "last_name": account.last_name,
        "company_name": account.company_name,
    }
