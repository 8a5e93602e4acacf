"""
API v1 路由模块
"""
from . import accounts, documents, staff, talent_pool, consent, quotes, interviews, demands

__all__ = [
    "accounts",
    "documents",
    "staff",
    "talent_pool",
    "consent",
    "quotes",
    "interviews",
    "demands",
]
