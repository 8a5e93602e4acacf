"""
人才库 API 路由
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from talentbridge.core.response import success_response, list_response, ResponseModel, ListResponseModel, DictResponse
from talentbridge.core.security import Viewer, get_viewer, require_roles
from talentbridge.models.account import Role
from talentbridge.models.pipeline import PipelineStatusUpdate
from talentbridge.api.deps import get_talent_pool, get_pipeline_tracker
from talentbridge.services import TalentPool, PipelineTracker

router = APIRouter()


@router.get("/candidates", summary="浏览候选人", response_model=ListResponseModel[dict])
async def get_candidates(
    verified: bool = Query(False, description="仅已审核候选人"),
    skills: Optional[str] = Query(None, description="技能筛选，逗号分隔"),
    viewer: Viewer = Depends(get_viewer),
    pool: TalentPool = Depends(get_talent_pool),
):
    """
    浏览候选人；雇主视角已脱敏，未审核雇主得到空列表
    """
    candidates = await pool.browse(viewer, verified_only=verified, skills=skills)
    return list_response(candidates)


@router.get("/candidates/{candidate_id}", summary="查看候选人", response_model=DictResponse)
async def get_candidate(
    candidate_id: str,
    viewer: Viewer = Depends(get_viewer),
    pool: TalentPool = Depends(get_talent_pool),
):
    """
    查看单个候选人；雇主查看时记录浏览
    """
    return success_response(data=await pool.get_candidate(viewer, candidate_id))


@router.get("/candidates/{candidate_id}/views", summary="档案浏览记录", response_model=ListResponseModel[dict])
async def get_profile_views(
    candidate_id: str,
    viewer: Viewer = Depends(get_viewer),
    pool: TalentPool = Depends(get_talent_pool),
):
    """
    候选人查看自己被哪些雇主浏览过
    """
    return list_response(await pool.views(viewer, candidate_id))


@router.put("/relations/{candidate_id}/status", summary="更新管道阶段", response_model=ResponseModel[dict])
async def update_relation_status(
    candidate_id: str,
    data: PipelineStatusUpdate,
    viewer: Viewer = Depends(get_viewer),
    pipeline: PipelineTracker = Depends(get_pipeline_tracker),
):
    """
    雇主更新自己管道中候选人的阶段；运营/管理员须指定 employer_id
    """
    relation = await pipeline.update_for_viewer(
        viewer, candidate_id, data.status, employer_id=data.employer_id
    )
    return success_response(data=relation, message="阶段已更新")


@router.get("/my-relations", summary="我的管道", response_model=ListResponseModel[dict])
async def get_my_relations(
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    pipeline: PipelineTracker = Depends(get_pipeline_tracker),
):
    return list_response(await pipeline.list_for_employer(viewer, viewer.user_id))
