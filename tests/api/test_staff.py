"""
运营后台账户目录与平台统计 API 测试
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory, headers_for


@pytest.mark.asyncio
async def test_list_employers_with_profiles(client: AsyncClient, factory: DataFactory):
    """雇主列表附公司档案，新注册的在前"""
    staff = await factory.create_staff()
    first = await factory.create_employer(company_name="Alpha GmbH")
    second = await factory.create_employer(verified=False, company_name="Beta AG")
    await factory.create_candidate()

    response = await client.get("/api/v1/staff/employers", headers=headers_for(staff))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 2
    assert [e["id"] for e in data["items"]] == [second["id"], first["id"]]
    assert data["items"][0]["employer_profile"]["company_name"] == "Beta AG"
    assert data["items"][1]["is_verified"] is True


@pytest.mark.asyncio
async def test_list_workers_unmasked_with_profiles(client: AsyncClient, factory: DataFactory):
    """候选人列表不脱敏，附职业档案"""
    admin = await factory.create_staff(role="admin")
    first = await factory.create_candidate()
    second = await factory.create_candidate()
    await factory.update_profile(first, skills=["Nursing"])
    await factory.create_employer()

    response = await client.get("/api/v1/staff/workers", headers=headers_for(admin))
    assert response.status_code == 200
    items = response.json()["data"]["items"]
    assert [w["id"] for w in items] == [second["id"], first["id"]]
    assert items[0]["email"] == second["email"]
    assert items[0]["last_name"] == second["last_name"]
    assert items[1]["candidate_profile"]["skills"] == ["Nursing"]


@pytest.mark.asyncio
async def test_list_users(client: AsyncClient, factory: DataFactory):
    staff = await factory.create_staff()
    candidate = await factory.create_candidate()
    employer = await factory.create_employer()

    response = await client.get("/api/v1/staff/users", headers=headers_for(staff))
    data = response.json()["data"]
    assert data["total"] == 3
    assert {u["id"] for u in data["items"]} == {staff["id"], candidate["id"], employer["id"]}
    assert {u["role"] for u in data["items"]} == {"staff", "candidate", "employer"}


@pytest.mark.asyncio
async def test_platform_stats(client: AsyncClient, factory: DataFactory):
    """平台总览计数，运营工作台的材料统计不受影响"""
    staff = await factory.create_staff()
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    await factory.create_candidate()
    await factory.create_quote(employer, candidate)
    await factory.create_demand(employer)
    await factory.create_demand(employer, title="Elektroniker")

    response = await client.get("/api/v1/staff/platform-stats", headers=headers_for(staff))
    assert response.status_code == 200
    assert response.json()["data"] == {
        "total_users": 4,
        "total_employers": 1,
        "total_workers": 2,
        "total_demands": 2,
        "total_quotes": 1,
    }

    response = await client.get("/api/v1/staff/stats", headers=headers_for(staff))
    assert response.json()["data"]["total_candidates"] == 2


@pytest.mark.asyncio
async def test_directory_restricted_to_staff(client: AsyncClient, factory: DataFactory):
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()

    for path in ("employers", "workers", "users", "platform-stats"):
        for account in (employer, candidate):
            response = await client.get(f"/api/v1/staff/{path}", headers=headers_for(account))
            assert response.status_code == 403, path
        response = await client.get(f"/api/v1/staff/{path}")
        assert response.status_code == 401, path
