"""
报价请求 API 路由
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from talentbridge.core.response import success_response, list_response, ResponseModel, ListResponseModel
from talentbridge.core.security import Viewer, get_viewer, require_roles
from talentbridge.models.account import Role
from talentbridge.models.quote import QuoteRequestCreate, QuoteResolve, OptionSelect
from talentbridge.api.deps import get_quote_engine
from talentbridge.services import QuoteEngine

router = APIRouter()


@router.post("", summary="申请报价", response_model=ResponseModel[dict])
async def create_quote_request(
    data: QuoteRequestCreate,
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    engine: QuoteEngine = Depends(get_quote_engine),
):
    """
    已审核雇主为候选人申请报价
    """
    quote = await engine.create(viewer.user_id, data.candidate_id)
    items = await engine.present(viewer, [quote])
    return success_response(data=items[0], message="报价申请已提交")


@router.get("/my", summary="我的报价", response_model=ListResponseModel[dict])
async def get_my_quotes(
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    engine: QuoteEngine = Depends(get_quote_engine),
):
    return list_response(await engine.list_mine(viewer))


@router.get("/all", summary="全部报价", response_model=ListResponseModel[dict])
async def get_all_quotes(
    status: Optional[str] = Query(None, description="按状态筛选"),
    viewer: Viewer = Depends(require_roles(Role.STAFF, Role.ADMIN)),
    engine: QuoteEngine = Depends(get_quote_engine),
):
    return list_response(await engine.list_all(viewer, status=status))


@router.put("/{request_id}/resolve", summary="处理报价申请", response_model=ResponseModel[dict])
async def resolve_quote_request(
    request_id: str,
    data: QuoteResolve,
    viewer: Viewer = Depends(require_roles(Role.STAFF, Role.ADMIN)),
    engine: QuoteEngine = Depends(get_quote_engine),
):
    """
    批准时生成两档方案，或驳回
    """
    quote = await engine.resolve(viewer.user_id, request_id, data.status, data.cost_estimate)
    items = await engine.present(viewer, [quote])
    return success_response(data=items[0], message="报价申请已处理")


@router.put("/{request_id}/select-option", summary="选择报价方案", response_model=ResponseModel[dict])
async def select_quote_option(
    request_id: str,
    data: OptionSelect,
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    engine: QuoteEngine = Depends(get_quote_engine),
):
    quote = await engine.select_option(request_id, viewer.user_id, data.option_id)
    items = await engine.present(viewer, [quote])
    return success_response(data=items[0], message="方案已选择")


@router.get("/{request_id}", summary="报价详情", response_model=ResponseModel[dict])
async def get_quote_request(
    request_id: str,
    viewer: Viewer = Depends(get_viewer),
    engine: QuoteEngine = Depends(get_quote_engine),
):
    """
    本人雇主或运营/管理员可查看
    """
    return success_response(data=await engine.get_one(viewer, request_id))
