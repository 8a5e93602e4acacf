"""
CRUD 基类模块 - SQLModel 简化版

直接使用 SQLModel 对象，无需 model_dump() 转换
"""
from typing import Generic, TypeVar, Type, Optional, Any, Dict, Iterable
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from talentbridge.models.base import utcnow

ModelType = TypeVar("ModelType", bound=SQLModel)


class CRUDBase(Generic[ModelType]):
    """
    CRUD 基类 - 简化版

    直接操作 SQLModel 对象，减少样板代码
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: str) -> Optional[ModelType]:
        """根据 ID 获取单条记录"""
        result = await db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, db: AsyncSession, id: str) -> Optional[ModelType]:
        """
        根据 ID 获取并锁定单条记录

        读后写的流转（答复、选择方案、处理报价）都经由此处加载，
        同一行的并发更新由数据库行锁串行化
        """
        result = await db.execute(
            select(self.model)
            .where(self.model.id == id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_many(self, db: AsyncSession, ids: Iterable[str]) -> Dict[str, ModelType]:
        """按 ID 批量获取，返回 {id: 记录}"""
        ids = {i for i in ids if i}
        if not ids:
            return {}
        result = await db.execute(
            select(self.model).where(self.model.id.in_(ids))
        )
        return {obj.id: obj for obj in result.scalars().all()}

    async def count(self, db: AsyncSession) -> int:
        """获取总记录数"""
        result = await db.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar() or 0

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: SQLModel | Dict[str, Any]
    ) -> ModelType:
        """
        创建记录

        SQLModel 可以直接从 Schema 创建 Model
        """
        # 如果传入的是 dict，直接使用；否则转换
        if isinstance(obj_in, dict):
            db_obj = self.model(**obj_in)
        else:
            db_obj = self.model.model_validate(obj_in)

        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: SQLModel | Dict[str, Any]
    ) -> ModelType:
        """
        更新记录

        支持传入 Schema 或 dict；dict 中的 None 也会写入
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)
        if hasattr(db_obj, "updated_at"):
            db_obj.updated_at = utcnow()

        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: str) -> bool:
        """删除记录"""
        obj = await self.get(db, id)
        if obj:
            await db.delete(obj)
            await db.flush()
            return True
        return False
