"""
授权请求 API 路由
"""
from fastapi import APIRouter, Depends

from talentbridge.core.response import success_response, list_response, ResponseModel, ListResponseModel
from talentbridge.core.security import Viewer, require_roles
from talentbridge.models.account import Role
from talentbridge.models.consent import ConsentRequestCreate, ConsentDecision
from talentbridge.api.deps import get_consent_engine
from talentbridge.services import ConsentEngine

router = APIRouter()


@router.post("", summary="发起授权请求", response_model=ResponseModel[dict])
async def create_consent_request(
    data: ConsentRequestCreate,
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    engine: ConsentEngine = Depends(get_consent_engine),
):
    """
    雇主向候选人发起授权请求，同一候选人同时只能有一条待答复请求
    """
    request = await engine.create(viewer.user_id, data.candidate_id, data.message)
    items = await engine.present(viewer, [request])
    return success_response(data=items[0], message="授权请求已发送")


@router.get("/my-requests", summary="我收到的授权请求", response_model=ListResponseModel[dict])
async def get_my_consent_requests(
    viewer: Viewer = Depends(require_roles(Role.CANDIDATE)),
    engine: ConsentEngine = Depends(get_consent_engine),
):
    return list_response(await engine.list_for_candidate(viewer, viewer.user_id))


@router.patch("/{request_id}/respond", summary="答复授权请求", response_model=ResponseModel[dict])
async def respond_consent_request(
    request_id: str,
    data: ConsentDecision,
    viewer: Viewer = Depends(require_roles(Role.CANDIDATE)),
    engine: ConsentEngine = Depends(get_consent_engine),
):
    """
    候选人同意或拒绝
    """
    request = await engine.respond(request_id, viewer.user_id, data.status)
    items = await engine.present(viewer, [request])
    return success_response(data=items[0], message="已答复")


@router.get("/employer/my-requests", summary="我发出的授权请求", response_model=ListResponseModel[dict])
async def get_employer_consent_requests(
    viewer: Viewer = Depends(require_roles(Role.EMPLOYER)),
    engine: ConsentEngine = Depends(get_consent_engine),
):
    """
    雇主发出的请求，候选人信息已脱敏
    """
    return list_response(await engine.list_for_employer(viewer, viewer.user_id))
