"""
人才需求 API 路由
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from talentbridge.core.response import (
    success_response,
    list_response,
    ResponseModel,
    ListResponseModel,
    MessageResponse,
)
from talentbridge.core.security import Viewer, get_viewer, require_roles
from talentbridge.models.account import Role
from talentbridge.models.demand import (
    TalentDemandCreate,
    DemandStatusUpdate,
    CandidateSuggestion,
    TalentDemandResponse,
)
from talentbridge.api.deps import get_demand_board
from talentbridge.services import TalentDemandBoard

router = APIRouter()


@router.post("", summary="发布人才需求", response_model=ResponseModel[TalentDemandResponse])
async def create_demand(
    data: TalentDemandCreate,
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    board: TalentDemandBoard = Depends(get_demand_board),
):
    """
    已审核雇主发布需求
    """
    demand = await board.create(viewer, data)
    return success_response(
        data=TalentDemandResponse.model_validate(demand).model_dump(),
        message="需求已发布"
    )


@router.get("/my", summary="我的人才需求", response_model=ListResponseModel[TalentDemandResponse])
async def get_my_demands(
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    board: TalentDemandBoard = Depends(get_demand_board),
):
    return list_response(await board.list_mine(viewer))


@router.get("", summary="全部人才需求", response_model=ListResponseModel[TalentDemandResponse])
async def get_all_demands(
    status: Optional[str] = Query(None, description="按状态筛选"),
    viewer: Viewer = Depends(require_roles(Role.STAFF, Role.ADMIN)),
    board: TalentDemandBoard = Depends(get_demand_board),
):
    return list_response(await board.list_all(status=status))


@router.delete("/{demand_id}", summary="删除人才需求", response_model=MessageResponse)
async def delete_demand(
    demand_id: str,
    viewer: Viewer = Depends(get_viewer),
    board: TalentDemandBoard = Depends(get_demand_board),
):
    """
    发布者或运营/管理员可删除
    """
    await board.delete(viewer, demand_id)
    return success_response(message="需求已删除")


@router.put("/{demand_id}/status", summary="更新需求状态", response_model=ResponseModel[TalentDemandResponse])
async def update_demand_status(
    demand_id: str,
    data: DemandStatusUpdate,
    viewer: Viewer = Depends(require_roles(Role.STAFF, Role.ADMIN)),
    board: TalentDemandBoard = Depends(get_demand_board),
):
    demand = await board.update_status(viewer, demand_id, data.status)
    return success_response(
        data=TalentDemandResponse.model_validate(demand).model_dump(),
        message="状态已更新"
    )


@router.post("/{demand_id}/suggest", summary="推荐候选人", response_model=ResponseModel[TalentDemandResponse])
async def suggest_candidate(
    demand_id: str,
    data: CandidateSuggestion,
    viewer: Viewer = Depends(require_roles(Role.STAFF, Role.ADMIN)),
    board: TalentDemandBoard = Depends(get_demand_board),
):
    """
    推荐候选人；首次推荐时为该雇主自动生成已批准的报价
    """
    demand = await board.suggest(viewer, demand_id, data.candidate_id)
    return success_response(
        data=TalentDemandResponse.model_validate(demand).model_dump(),
        message="候选人已推荐"
    )


@router.get("/{demand_id}/suggested", summary="推荐的候选人", response_model=ListResponseModel[dict])
async def get_suggested_candidates(
    demand_id: str,
    viewer: Viewer = Depends(get_viewer),
    board: TalentDemandBoard = Depends(get_demand_board),
):
    """
    雇主视角已脱敏
    """
    return list_response(await board.suggested_candidates(viewer, demand_id))
