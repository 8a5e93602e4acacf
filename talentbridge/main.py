"""
FastAPI 主应用入口

TalentBridge 人才安置平台后端
"""
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from loguru import logger

from talentbridge.core.config import settings
from talentbridge.core.database import init_db, close_db
from talentbridge.core.logging import configure_logging
from talentbridge.core.response import success_response, DictResponse
from talentbridge.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)
from talentbridge.api import api_router

API_VERSION = "1.0.0"


def runtime_policy() -> Dict[str, Any]:
    """当前生效的审计输出与重复处理策略"""
    return {
        "audit_sink": settings.audit_sink,
        "allow_quote_re_resolution": settings.allow_quote_re_resolution,
        "allow_consent_re_response": settings.allow_consent_re_response,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动时建表并打印运行策略，关闭时释放连接池"""
    logger.info("{} 启动中 (env={})", settings.app_name, settings.app_env)
    await init_db()
    for key, value in runtime_policy().items():
        logger.info("策略 {} = {}", key, value)

    yield

    await close_db()
    logger.info("{} 已停止", settings.app_name)


# 由具体到宽泛，所有错误统一输出 {success, code, message, data}
EXCEPTION_HANDLERS = (
    (AppException, app_exception_handler),
    (HTTPException, http_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, general_exception_handler),
)


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="TalentBridge 人才安置平台 API",
        version=API_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # operationId 直接用路由函数名
        generate_unique_id_function=lambda route: route.name,
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["系统"], response_model=DictResponse)
    async def health_check():
        """存活检查，附带当前环境与运行策略"""
        return success_response(data={
            "status": "healthy",
            "env": settings.app_env,
            **runtime_policy(),
        })

    @app.get("/", tags=["系统"], response_model=DictResponse)
    async def root():
        return success_response(data={
            "name": settings.app_name,
            "version": API_VERSION,
            "docs": "/docs" if settings.debug else None,
        })

    # CORS 最后添加，位于中间件链最外层
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()
