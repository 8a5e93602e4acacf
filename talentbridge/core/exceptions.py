"""
异常处理模块

定义业务异常和全局异常处理器
"""
from contextlib import contextmanager

from fastapi import Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sqlalchemy.exc import IntegrityError

from .response import error_response


class AppException(Exception):
    """应用基础异常"""

    def __init__(
        self,
        message: str = "服务器内部错误",
        code: int = 500,
        data: dict = None
    ):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class NotFoundException(AppException):
    """资源不存在异常"""

    def __init__(self, message: str = "资源不存在"):
        super().__init__(message=message, code=404)


class BadRequestException(AppException):
    """请求参数错误异常"""

    def __init__(self, message: str = "请求参数错误"):
        super().__init__(message=message, code=400)


class UnauthorizedException(AppException):
    """身份未解析异常"""

    def __init__(self, message: str = "未提供有效身份"):
        super().__init__(message=message, code=401)


class ForbiddenException(AppException):
    """无权限异常（角色或归属不符）"""

    def __init__(self, message: str = "无权执行此操作"):
        super().__init__(message=message, code=403)


class ConflictException(AppException):
    """资源冲突异常（重复创建或状态不允许此流转）"""

    def __init__(self, message: str = "资源已存在"):
        super().__init__(message=message, code=409)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """应用异常处理器"""
    logger.warning(f"AppException: {exc.message} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.code,
        content=error_response(message=exc.message, code=exc.code, data=exc.data)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """HTTP 异常处理器"""
    logger.warning(f"HTTPException: {exc.detail} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message=str(exc.detail), code=exc.status_code)
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求验证异常处理器"""
    errors = exc.errors()
    error_messages = []
    for error in errors:
        loc = " -> ".join(str(l) for l in error["loc"])
        error_messages.append(f"{loc}: {error['msg']}")

    message = "; ".join(error_messages)
    logger.warning(f"ValidationError: {message} | Path: {request.url.path}")

    return JSONResponse(
        status_code=422,
        content=error_response(
            message="请求参数验证失败",
            code=422,
            data={"errors": jsonable_encoder(errors)}
        )
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """通用异常处理器"""
    logger.exception(f"Unhandled Exception: {exc} | Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_response(message="服务器内部错误", code=500)
    )


@contextmanager
def conflict_on_integrity_error(message: str = "资源已存在"):
    """
    唯一约束冲突转为 409

    并发创建同一 (雇主, 候选人) 记录时，后提交者在 flush 时触发 IntegrityError
    """
    try:
        yield
    except IntegrityError as exc:
        logger.warning(f"IntegrityError: {exc.orig}")
        raise ConflictException(message) from exc
