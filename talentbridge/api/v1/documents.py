"""
证明材料 API 路由
"""
from fastapi import APIRouter, Depends

from talentbridge.core.response import success_response, list_response, ResponseModel, ListResponseModel
from talentbridge.core.security import Viewer, require_roles
from talentbridge.models.account import Role
from talentbridge.models.document import DocumentCreate, DocumentResponse
from talentbridge.api.deps import get_document_registry
from talentbridge.services import DocumentRegistry

router = APIRouter()


@router.post("", summary="登记证明材料", response_model=ResponseModel[DocumentResponse])
async def register_document(
    data: DocumentCreate,
    viewer: Viewer = Depends(require_roles(Role.CANDIDATE)),
    registry: DocumentRegistry = Depends(get_document_registry),
):
    """
    候选人登记已上传文件的地址，等待运营审核
    """
    document = await registry.register(viewer, data)
    return success_response(
        data=DocumentResponse.model_validate(document).model_dump(),
        message="材料已提交"
    )


@router.get("/my", summary="我的证明材料", response_model=ListResponseModel[DocumentResponse])
async def get_my_documents(
    viewer: Viewer = Depends(require_roles(Role.CANDIDATE)),
    registry: DocumentRegistry = Depends(get_document_registry),
):
    return list_response(await registry.list_mine(viewer))
