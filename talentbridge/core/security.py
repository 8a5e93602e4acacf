"""
身份上下文模块

网关完成认证后通过请求头传入已解析的身份:
    X-User-Id:   账户ID
    X-User-Role: candidate / employer / staff / admin

本服务信任该身份，不再校验令牌
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header

from talentbridge.models.account import Role
from .exceptions import UnauthorizedException, ForbiddenException


@dataclass(frozen=True)
class Viewer:
    """当前请求的查看者（身份 + 角色）"""
    user_id: str
    role: Role

    @property
    def is_employer(self) -> bool:
        return self.role == Role.EMPLOYER

    @property
    def is_candidate(self) -> bool:
        return self.role == Role.CANDIDATE

    @property
    def is_staff(self) -> bool:
        """运营或管理员"""
        return self.role in (Role.STAFF, Role.ADMIN)

    def is_self(self, user_id: Optional[str]) -> bool:
        return user_id is not None and self.user_id == user_id


def _resolve_viewer(user_id: Optional[str], role: Optional[str]) -> Viewer:
    if not user_id or not role:
        raise UnauthorizedException("缺少身份信息")
    try:
        resolved = Role(role.strip().lower())
    except ValueError:
        raise UnauthorizedException(f"未知角色: {role}")
    return Viewer(user_id=user_id.strip(), role=resolved)


async def get_viewer(
    x_user_id: Optional[str] = Header(None, description="已认证的账户ID"),
    x_user_role: Optional[str] = Header(None, description="已认证的账户角色"),
) -> Viewer:
    """
    身份依赖注入

    使用方式:
        @router.get("/my")
        async def get_mine(viewer: Viewer = Depends(get_viewer)):
            ...
    """
    return _resolve_viewer(x_user_id, x_user_role)


async def get_optional_viewer(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Optional[Viewer]:
    """可选身份（注册等公开接口使用）"""
    if not x_user_id and not x_user_role:
        return None
    return _resolve_viewer(x_user_id, x_user_role)


def ensure_role(viewer: Viewer, *roles: Role) -> Viewer:
    """角色校验，不符抛出 403"""
    if viewer.role not in roles:
        allowed = ", ".join(r.value for r in roles)
        raise ForbiddenException(f"仅限以下角色操作: {allowed}")
    return viewer


def require_roles(*roles: Role):
    """
    角色限定依赖

    使用方式:
        @router.put("/{id}/resolve")
        async def resolve(viewer: Viewer = Depends(require_roles(Role.STAFF, Role.ADMIN))):
            ...
    """
    async def dependency(viewer: Viewer = Depends(get_viewer)) -> Viewer:
        return ensure_role(viewer, *roles)

    return dependency
