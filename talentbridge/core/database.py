"""
数据库配置模块

SQLAlchemy 2.0 异步引擎 + SQLModel 表模型，默认落在本地 SQLite 文件
"""
from pathlib import Path
from typing import AsyncGenerator, Optional

from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlmodel import SQLModel

from .config import settings


def sqlite_file_path(database_url: str) -> Optional[Path]:
    """SQLite 文件库的路径；内存库或其他数据库返回 None"""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
)

# 每个请求一个会话，提交后对象仍可读取
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    请求级会话依赖

    一个请求就是一个事务: 正常返回时提交，任何异常回滚，
    状态变更与同一请求写入的审计事件一起落库或一起丢弃
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    启动时准备数据库

    SQLite 文件所在目录不存在时先创建，再按 SQLModel 元数据建表
    """
    from talentbridge import models  # noqa: F401  注册所有表模型

    db_path = sqlite_file_path(settings.database_url)
    if db_path is not None and not db_path.parent.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("已创建数据目录: {}", db_path.parent)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("数据表已就绪: {} 张", len(SQLModel.metadata.tables))


async def close_db() -> None:
    await engine.dispose()
