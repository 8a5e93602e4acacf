"""
审计事件 CRUD 操作
"""
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.audit import AuditEvent
from .base import CRUDBase


class CRUDAudit(CRUDBase[AuditEvent]):
    """审计事件 CRUD 操作类（只追加）"""

    async def get_recent(
        self,
        db: AsyncSession,
        *,
        action: Optional[str] = None,
        actor_id: Optional[str] = None,
        limit: int = 100
    ) -> List[AuditEvent]:
        """最近的审计事件"""
        query = select(self.model)
        if action:
            query = query.where(self.model.action == action)
        if actor_id:
            query = query.where(self.model.actor_id == actor_id)
        result = await db.execute(
            query.order_by(self.model.timestamp.desc()).limit(limit)
        )
        return list(result.scalars().all())


audit_crud = CRUDAudit(AuditEvent)
