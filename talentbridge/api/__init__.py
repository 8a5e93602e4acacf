"""
API 路由模块
"""
from fastapi import APIRouter

from .v1 import accounts, documents, staff, talent_pool, consent, quotes, interviews, demands

# 创建主路由
api_router = APIRouter()

# 注册各模块路由
api_router.include_router(
    accounts.router,
    prefix="/accounts",
    tags=["账户管理"]
)
api_router.include_router(
    documents.router,
    prefix="/documents",
    tags=["证明材料"]
)
api_router.include_router(
    staff.router,
    prefix="/staff",
    tags=["运营后台"]
)
api_router.include_router(
    talent_pool.router,
    prefix="/talent-pool",
    tags=["人才库"]
)
api_router.include_router(
    consent.router,
    prefix="/consent",
    tags=["授权请求"]
)
api_router.include_router(
    quotes.router,
    prefix="/quotes",
    tags=["报价管理"]
)
api_router.include_router(
    interviews.router,
    prefix="/interviews",
    tags=["面试安排"]
)
api_router.include_router(
    demands.router,
    prefix="/talent-demands",
    tags=["人才需求"]
)
