"""
测试配置文件

提供测试用的 fixtures：内存数据库、测试客户端、测试数据工厂等
"""
from typing import AsyncGenerator, Optional
from dataclasses import dataclass, field

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from talentbridge import models  # noqa: F401  注册所有表模型
from talentbridge.core.database import get_db
from talentbridge.crud import account_crud
from talentbridge.main import create_app
from talentbridge.models.account import Role, VerificationStatus


def headers_for(account: dict) -> dict:
    """构造身份请求头"""
    return {"X-User-Id": account["id"], "X-User-Role": account["role"]}


# ========== 测试数据工厂 ==========

@dataclass
class DataFactory:
    """
    测试数据工厂类

    集中管理测试数据创建，避免各测试文件重复代码
    字段变更时只需修改此处
    """
    client: AsyncClient
    db: AsyncSession
    _counter: int = field(default=0, repr=False)

    def _next_id(self) -> str:
        """生成唯一后缀，避免数据冲突"""
        self._counter += 1
        return str(self._counter)

    async def create_candidate(self, **overrides) -> dict:
        """注册候选人，返回完整响应数据"""
        suffix = self._next_id()
        data = {
            "email": f"candidate{suffix}@example.com",
            "role": "candidate",
            "first_name": "Anna",
            "last_name": f"Muster{suffix}",
            "nationality": "Tunisian",
            "birth_date": "1995-04-12",
            "avatar_url": f"https://cdn.example.com/avatar{suffix}.png",
            "address": "Rue de Marseille 12",
            "sector": "Healthcare",
            **overrides
        }
        resp = await self.client.post("/api/v1/accounts", json=data)
        assert resp.status_code == 200, f"注册候选人失败: {resp.text}"
        return resp.json()["data"]

    async def create_employer(self, verified: bool = True, **overrides) -> dict:
        """注册雇主，默认直接置为已审核"""
        suffix = self._next_id()
        data = {
            "email": f"employer{suffix}@example.com",
            "role": "employer",
            "first_name": "Klaus",
            "last_name": "Berg",
            "company_name": f"Klinik {suffix} GmbH",
            **overrides
        }
        resp = await self.client.post("/api/v1/accounts", json=data)
        assert resp.status_code == 200, f"注册雇主失败: {resp.text}"
        employer = resp.json()["data"]
        if verified:
            await self.mark_verified(employer["id"])
            employer["is_verified"] = True
        return employer

    async def create_staff(self, role: Role | str = Role.STAFF) -> dict:
        """直接写库创建运营/管理员（注册接口需要管理员身份）"""
        role = Role(role)
        suffix = self._next_id()
        account = await account_crud.create(self.db, obj_in={
            "email": f"{role.value}{suffix}@talentbridge.example",
            "role": role.value,
            "first_name": "Sam",
            "last_name": f"Staff{suffix}",
            "is_verified": True,
            "verification_status": VerificationStatus.VERIFIED.value,
        })
        await self.db.commit()
        return {"id": account.id, "role": account.role, "email": account.email}

    async def mark_verified(self, account_id: str) -> None:
        account = await account_crud.get(self.db, account_id)
        await account_crud.update(self.db, db_obj=account, obj_in={
            "is_verified": True,
            "verification_status": VerificationStatus.VERIFIED.value,
        })
        await self.db.commit()

    async def update_profile(self, candidate: dict, **profile) -> dict:
        resp = await self.client.patch(
            "/api/v1/accounts/me/profile", json=profile, headers=headers_for(candidate)
        )
        assert resp.status_code == 200, f"更新档案失败: {resp.text}"
        return resp.json()["data"]

    async def create_quote(self, employer: dict, candidate: Optional[dict] = None) -> dict:
        """雇主申请报价"""
        if candidate is None:
            candidate = await self.create_candidate()
        resp = await self.client.post(
            "/api/v1/quotes",
            json={"candidate_id": candidate["id"]},
            headers=headers_for(employer),
        )
        assert resp.status_code == 200, f"申请报价失败: {resp.text}"
        return resp.json()["data"]

    async def create_interview(
        self,
        employer: dict,
        candidate: dict,
        slots: Optional[list] = None,
        **overrides
    ) -> dict:
        """雇主安排面试"""
        data = {
            "candidate_id": candidate["id"],
            "title": "Erstgespräch",
            "proposed_times": slots or [
                {"datetime": "2025-03-01T10:00:00+01:00", "duration": 45},
                {"datetime": "2025-03-02T14:30:00+01:00", "duration": 60},
            ],
            **overrides
        }
        resp = await self.client.post("/api/v1/interviews", json=data, headers=headers_for(employer))
        assert resp.status_code == 200, f"安排面试失败: {resp.text}"
        return resp.json()["data"]

    async def create_demand(self, employer: dict, **overrides) -> dict:
        """雇主发布人才需求"""
        data = {
            "title": "Pflegefachkraft",
            "sector": "Healthcare",
            "description": "Stationäre Pflege",
            "required_skills": ["Nursing", "German B2"],
            "headcount": 2,
            **overrides
        }
        resp = await self.client.post("/api/v1/talent-demands", json=data, headers=headers_for(employer))
        assert resp.status_code == 200, f"发布需求失败: {resp.text}"
        return resp.json()["data"]


@pytest_asyncio.fixture
async def factory(client: AsyncClient, db_session: AsyncSession) -> DataFactory:
    """提供测试数据工厂实例"""
    return DataFactory(client=client, db=db_session)


# 使用内存 SQLite 作为测试数据库
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    为每个测试函数提供独立的数据库会话

    每个测试使用新的内存库，测试结束后释放引擎，确保测试隔离
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    提供测试用的 HTTP 客户端

    覆盖 get_db 依赖，使用测试数据库
    """
    app = create_app()

    # 覆盖数据库依赖
    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    # 创建异步测试客户端
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    # 清理依赖覆盖
    app.dependency_overrides.clear()
