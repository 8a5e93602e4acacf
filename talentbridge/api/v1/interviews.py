"""
面试安排 API 路由
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from talentbridge.core.response import success_response, list_response, ResponseModel, ListResponseModel
from talentbridge.core.security import Viewer, get_viewer, require_roles
from talentbridge.models.account import Role
from talentbridge.models.interview import InterviewCreate, SlotAnswer
from talentbridge.api.deps import get_interview_scheduler
from talentbridge.services import InterviewScheduler

router = APIRouter()


@router.post("", summary="安排面试", response_model=ResponseModel[dict])
async def schedule_interview(
    data: InterviewCreate,
    viewer: Viewer = Depends(get_viewer),
    scheduler: InterviewScheduler = Depends(get_interview_scheduler),
):
    """
    提出若干候选时间段，生成会议室
    """
    interview = await scheduler.schedule(viewer, data)
    items = await scheduler.present(viewer, [interview])
    return success_response(data=items[0], message="面试已安排")


@router.get("/my", summary="我的面试", response_model=ListResponseModel[dict])
async def get_my_interviews(
    status: Optional[str] = Query(None, description="按状态筛选"),
    viewer: Viewer = Depends(get_viewer),
    scheduler: InterviewScheduler = Depends(get_interview_scheduler),
):
    return list_response(await scheduler.list_mine(viewer, status=status))


@router.get("", summary="全部面试", response_model=ListResponseModel[dict])
async def get_all_interviews(
    status: Optional[str] = Query(None, description="按状态筛选"),
    viewer: Viewer = Depends(require_roles(Role.STAFF, Role.ADMIN)),
    scheduler: InterviewScheduler = Depends(get_interview_scheduler),
):
    return list_response(await scheduler.list_all(viewer, status=status))


@router.get("/{interview_id}", summary="面试详情", response_model=ResponseModel[dict])
async def get_interview(
    interview_id: str,
    viewer: Viewer = Depends(get_viewer),
    scheduler: InterviewScheduler = Depends(get_interview_scheduler),
):
    return success_response(data=await scheduler.get_one(viewer, interview_id))


@router.put("/{interview_id}/respond", summary="答复时间段", response_model=ResponseModel[dict])
async def respond_to_slot(
    interview_id: str,
    data: SlotAnswer,
    viewer: Viewer = Depends(get_viewer),
    scheduler: InterviewScheduler = Depends(get_interview_scheduler),
):
    """
    接受或拒绝某个时间段；接受后面试进入已确认
    """
    interview = await scheduler.respond_to_slot(viewer, interview_id, data.slot_id, data.accepted)
    items = await scheduler.present(viewer, [interview])
    return success_response(data=items[0], message="已答复")


@router.put("/{interview_id}/cancel", summary="取消面试", response_model=ResponseModel[dict])
async def cancel_interview(
    interview_id: str,
    viewer: Viewer = Depends(get_viewer),
    scheduler: InterviewScheduler = Depends(get_interview_scheduler),
):
    interview = await scheduler.cancel(viewer, interview_id)
    items = await scheduler.present(viewer, [interview])
    return success_response(data=items[0], message="面试已取消")


@router.put("/{interview_id}/complete", summary="完成面试", response_model=ResponseModel[dict])
async def complete_interview(
    interview_id: str,
    viewer: Viewer = Depends(get_viewer),
    scheduler: InterviewScheduler = Depends(get_interview_scheduler),
):
    """
    完成已确认的面试，并把管道阶段同步为 interviewed
    """
    interview = await scheduler.complete(viewer, interview_id)
    items = await scheduler.present(viewer, [interview])
    return success_response(data=items[0], message="面试已完成")
