"""
人才需求 API 测试

发布、运营推荐与自动报价
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory, headers_for


async def suggest(client: AsyncClient, staff: dict, demand_id: str, candidate: dict):
    return await client.post(
        f"/api/v1/talent-demands/{demand_id}/suggest",
        json={"candidate_id": candidate["id"]},
        headers=headers_for(staff),
    )


@pytest.mark.asyncio
async def test_create_demand_requires_verified_employer(client: AsyncClient, factory: DataFactory):
    pending = await factory.create_employer(verified=False)
    response = await client.post(
        "/api/v1/talent-demands", json={"title": "Pflegefachkraft"}, headers=headers_for(pending)
    )
    assert response.status_code == 403

    employer = await factory.create_employer()
    demand = await factory.create_demand(employer)
    assert demand["status"] == "open"
    assert demand["employer_id"] == employer["id"]
    assert demand["experience_level"] == "mid"
    assert demand["suggested_candidate_ids"] == []

    response = await client.get("/api/v1/talent-demands/my", headers=headers_for(employer))
    assert response.json()["data"]["total"] == 1


@pytest.mark.asyncio
async def test_suggest_creates_approved_quote_once(client: AsyncClient, factory: DataFactory):
    """首次推荐自动生成已批准报价，重复推荐不重复记录"""
    employer = await factory.create_employer()
    staff = await factory.create_staff()
    candidate = await factory.create_candidate()
    demand = await factory.create_demand(employer)

    for _ in range(2):
        response = await suggest(client, staff, demand["id"], candidate)
        assert response.status_code == 200
        assert response.json()["data"]["suggested_candidate_ids"] == [candidate["id"]]

    response = await client.get("/api/v1/quotes/my", headers=headers_for(employer))
    quotes = response.json()["data"]["items"]
    assert len(quotes) == 1
    assert quotes[0]["status"] == "approved"
    assert quotes[0]["candidate_id"] == candidate["id"]
    assert len(quotes[0]["options"]) == 2

    response = await client.get(
        "/api/v1/staff/audit-events", params={"action": "CANDIDATE_SUGGESTED"}, headers=headers_for(staff)
    )
    assert response.json()["data"]["total"] == 1


@pytest.mark.asyncio
async def test_suggest_keeps_existing_open_quote(client: AsyncClient, factory: DataFactory):
    employer = await factory.create_employer()
    staff = await factory.create_staff()
    candidate = await factory.create_candidate()
    existing = await factory.create_quote(employer, candidate)
    demand = await factory.create_demand(employer)

    await suggest(client, staff, demand["id"], candidate)

    response = await client.get("/api/v1/quotes/my", headers=headers_for(employer))
    quotes = response.json()["data"]["items"]
    assert [q["id"] for q in quotes] == [existing["id"]]
    assert quotes[0]["status"] == "pending"


@pytest.mark.asyncio
async def test_suggested_candidates_are_masked_for_employer(client: AsyncClient, factory: DataFactory):
    employer = await factory.create_employer()
    other = await factory.create_employer()
    staff = await factory.create_staff()
    candidate = await factory.create_candidate()
    demand = await factory.create_demand(employer)
    await suggest(client, staff, demand["id"], candidate)

    response = await client.get(f"/api/v1/talent-demands/{demand['id']}/suggested", headers=headers_for(employer))
    items = response.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["email"] == "********@germantalent.de"

    response = await client.get(f"/api/v1/talent-demands/{demand['id']}/suggested", headers=headers_for(other))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_demand_status_and_delete(client: AsyncClient, factory: DataFactory):
    employer = await factory.create_employer()
    other = await factory.create_employer()
    staff = await factory.create_staff()
    demand = await factory.create_demand(employer)

    response = await client.put(
        f"/api/v1/talent-demands/{demand['id']}/status", json={"status": "treating"}, headers=headers_for(staff)
    )
    assert response.json()["data"]["status"] == "treating"

    response = await client.put(
        f"/api/v1/talent-demands/{demand['id']}/status", json={"status": "treating"}, headers=headers_for(employer)
    )
    assert response.status_code == 403

    response = await client.get("/api/v1/talent-demands", params={"status": "treating"}, headers=headers_for(staff))
    items = response.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["employer"]["company_name"] == employer["company_name"]

    response = await client.delete(f"/api/v1/talent-demands/{demand['id']}", headers=headers_for(other))
    assert response.status_code == 403

    response = await client.delete(f"/api/v1/talent-demands/{demand['id']}", headers=headers_for(employer))
    assert response.status_code == 200

    response = await client.get("/api/v1/talent-demands/my", headers=headers_for(employer))
    assert response.json()["data"]["total"] == 0
