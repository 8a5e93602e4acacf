"""
账户 API 路由
"""
from typing import Optional
from fastapi import APIRouter, Depends

from talentbridge.core.response import success_response, ResponseModel, DictResponse
from talentbridge.core.security import Viewer, get_viewer, get_optional_viewer
from talentbridge.models.account import AccountCreate, CandidateProfileUpdate, EmployerProfileUpdate
from talentbridge.api.deps import get_account_registry, get_talent_pool
from talentbridge.services import AccountRegistry, TalentPool

router = APIRouter()


@router.post("", summary="注册账户", response_model=ResponseModel[dict])
async def register_account(
    data: AccountCreate,
    viewer: Optional[Viewer] = Depends(get_optional_viewer),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    注册候选人或雇主账户；运营/管理员账户需管理员身份创建
    """
    account = await registry.register(data, viewer)
    return success_response(data=account, message="注册成功")


@router.get("/me", summary="获取当前账户", response_model=ResponseModel[dict])
async def get_me(
    viewer: Viewer = Depends(get_viewer),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    当前账户信息，候选人附带档案
    """
    return success_response(data=await registry.me(viewer))


@router.patch("/me/profile", summary="更新候选人档案", response_model=ResponseModel[dict])
async def update_my_profile(
    data: CandidateProfileUpdate,
    viewer: Viewer = Depends(get_viewer),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    候选人更新个人信息与档案，返回重算后的完整度
    """
    account = await registry.update_candidate_profile(viewer, data)
    return success_response(data=account, message="档案更新成功")


@router.patch("/me/employer-profile", summary="更新雇主公司档案", response_model=ResponseModel[dict])
async def update_my_employer_profile(
    data: EmployerProfileUpdate,
    viewer: Viewer = Depends(get_viewer),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    雇主更新自己的姓名、公司名称与公司档案
    """
    account = await registry.update_employer_profile(viewer, data)
    return success_response(data=account, message="公司档案更新成功")


@router.post("/me/verification-request", summary="提交审核申请", response_model=ResponseModel[dict])
async def request_verification(
    viewer: Viewer = Depends(get_viewer),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """
    未审核或被驳回的账户提交审核
    """
    account = await registry.request_verification(viewer)
    return success_response(data=account, message="审核申请已提交")


@router.get("/me/stats", summary="个人工作台统计", response_model=DictResponse)
async def get_my_stats(
    viewer: Viewer = Depends(get_viewer),
    pool: TalentPool = Depends(get_talent_pool),
):
    """
    候选人: 浏览次数、待答复授权、档案完整度；雇主: 管道人数、浏览次数
    """
    return success_response(data=await pool.dashboard_stats(viewer))


@router.get("/employers/{employer_id}", summary="查看雇主档案", response_model=ResponseModel[dict])
async def get_employer(
    employer_id: str,
    viewer: Viewer = Depends(get_viewer),
    registry: AccountRegistry = Depends(get_account_registry),
):
    return success_response(data=await registry.get_employer(employer_id))
