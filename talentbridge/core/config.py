"""
应用配置模块

使用 pydantic-settings 管理环境变量和应用配置
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import json

# 项目根目录
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # 应用基础配置
    app_name: str = "TalentBridge-API"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # 数据库配置
    database_url: str = f"sqlite+aiosqlite:///{BASE_DIR / 'data' / 'talentbridge.db'}"
    database_echo: bool = False

    # CORS 配置
    cors_origins: List[str] = ["*"]

    # 匿名化配置
    masked_email: str = "********@germantalent.de"

    # 审计配置: database 写入审计表, log 仅写日志, both 两者都写
    audit_sink: Literal["database", "log", "both"] = "database"

    # 面试配置
    meeting_room_prefix: str = "wdf"

    # 状态机策略
    allow_quote_re_resolution: bool = False
    allow_consent_re_response: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_path(cls, v):
        if isinstance(v, str) and "./data/" in v:
            return v.replace("./data/", str(BASE_DIR / "data") + "/")
        return v


@lru_cache
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


# 全局配置实例
settings = get_settings()
