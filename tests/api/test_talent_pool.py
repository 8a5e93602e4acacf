"""
人才库与招聘管道 API 测试
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory, headers_for


@pytest.mark.asyncio
async def test_browse_requires_verified_employer(client: AsyncClient, factory: DataFactory):
    """未审核雇主得到空列表；已审核雇主看到脱敏候选人"""
    await factory.create_candidate()
    pending = await factory.create_employer(verified=False)
    employer = await factory.create_employer()

    response = await client.get("/api/v1/talent-pool/candidates", headers=headers_for(pending))
    assert response.status_code == 200
    assert response.json()["data"]["items"] == []

    response = await client.get("/api/v1/talent-pool/candidates", headers=headers_for(employer))
    items = response.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["email"] == "********@germantalent.de"
    assert "avatar_url" not in items[0]
    assert items[0]["full_name"].startswith("Anna Muster")


@pytest.mark.asyncio
async def test_browse_filters(client: AsyncClient, factory: DataFactory):
    """技能筛选不区分大小写；verified 仅返回已审核候选人"""
    employer = await factory.create_employer()
    nurse = await factory.create_candidate()
    welder = await factory.create_candidate()
    await factory.update_profile(nurse, skills=["Nursing", "German B2"])
    await factory.update_profile(welder, skills=["TIG Welding"])
    await factory.mark_verified(welder["id"])

    response = await client.get(
        "/api/v1/talent-pool/candidates", params={"skills": "nurs, python"}, headers=headers_for(employer)
    )
    assert [c["id"] for c in response.json()["data"]["items"]] == [nurse["id"]]

    response = await client.get(
        "/api/v1/talent-pool/candidates", params={"verified": True}, headers=headers_for(employer)
    )
    assert [c["id"] for c in response.json()["data"]["items"]] == [welder["id"]]


@pytest.mark.asyncio
async def test_staff_browse_unmasked_and_candidate_forbidden(client: AsyncClient, factory: DataFactory):
    candidate = await factory.create_candidate()
    staff = await factory.create_staff()

    response = await client.get("/api/v1/talent-pool/candidates", headers=headers_for(staff))
    assert response.json()["data"]["items"][0]["email"] == candidate["email"]

    response = await client.get("/api/v1/talent-pool/candidates", headers=headers_for(candidate))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_employer_view_is_recorded(client: AsyncClient, factory: DataFactory):
    """雇主查看候选人时记录浏览，候选人可查看浏览记录与统计"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    other = await factory.create_candidate()

    response = await client.get(
        f"/api/v1/talent-pool/candidates/{candidate['id']}", headers=headers_for(employer)
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["candidate"]["email"] == "********@germantalent.de"
    assert data["documents"] == []

    response = await client.get(
        f"/api/v1/talent-pool/candidates/{candidate['id']}/views", headers=headers_for(candidate)
    )
    views = response.json()["data"]["items"]
    assert len(views) == 1
    assert views[0]["employer"]["company_name"] == employer["company_name"]

    response = await client.get(
        f"/api/v1/talent-pool/candidates/{candidate['id']}/views", headers=headers_for(other)
    )
    assert response.status_code == 403

    response = await client.get("/api/v1/accounts/me/stats", headers=headers_for(candidate))
    assert response.json()["data"]["profile_views"] == 1

    response = await client.get("/api/v1/accounts/me/stats", headers=headers_for(employer))
    assert response.json()["data"]["profile_views"] == 1


@pytest.mark.asyncio
async def test_get_candidate_access(client: AsyncClient, factory: DataFactory):
    candidate = await factory.create_candidate()
    other = await factory.create_candidate()
    pending = await factory.create_employer(verified=False)

    response = await client.get(f"/api/v1/talent-pool/candidates/{candidate['id']}", headers=headers_for(other))
    assert response.status_code == 403

    response = await client.get(f"/api/v1/talent-pool/candidates/{candidate['id']}", headers=headers_for(pending))
    assert response.status_code == 403

    response = await client.get(f"/api/v1/talent-pool/candidates/{candidate['id']}", headers=headers_for(candidate))
    assert response.status_code == 200
    assert response.json()["data"]["candidate"]["avatar_url"] == candidate["avatar_url"]

    response = await client.get("/api/v1/talent-pool/candidates/missing", headers=headers_for(candidate))
    assert response.status_code == 403


# ==================== 招聘管道 ====================

@pytest.mark.asyncio
async def test_pipeline_upsert_latest_status(client: AsyncClient, factory: DataFactory):
    """同一组合重复更新只保留一条记录"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()

    for status in ("shortlisted", "asked_quote"):
        response = await client.put(
            f"/api/v1/talent-pool/relations/{candidate['id']}/status",
            json={"status": status},
            headers=headers_for(employer),
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == status

    response = await client.get("/api/v1/talent-pool/my-relations", headers=headers_for(employer))
    items = response.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["status"] == "asked_quote"
    assert items[0]["candidate"]["email"] == "********@germantalent.de"

    response = await client.get("/api/v1/accounts/me/stats", headers=headers_for(employer))
    assert response.json()["data"]["pipeline_candidates"] == 1


@pytest.mark.asyncio
async def test_pipeline_update_by_role(client: AsyncClient, factory: DataFactory):
    """运营须指定雇主；候选人不能修改"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    staff = await factory.create_staff()
    url = f"/api/v1/talent-pool/relations/{candidate['id']}/status"

    response = await client.put(url, json={"status": "potential"}, headers=headers_for(staff))
    assert response.status_code == 400

    response = await client.put(
        url, json={"status": "potential", "employer_id": "missing"}, headers=headers_for(staff)
    )
    assert response.status_code == 404

    response = await client.put(
        url, json={"status": "hired", "employer_id": employer["id"]}, headers=headers_for(staff)
    )
    assert response.status_code == 200

    response = await client.put(url, json={"status": "hired"}, headers=headers_for(candidate))
    assert response.status_code == 403

    response = await client.put(url, json={"status": "promoted"}, headers=headers_for(employer))
    assert response.status_code == 422

    response = await client.get("/api/v1/staff/relations", headers=headers_for(staff))
    items = response.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["status"] == "hired"
    assert items[0]["employer_name"] == employer["company_name"]
    assert items[0]["candidate"]["email"] == candidate["email"]

    response = await client.get(
        "/api/v1/staff/audit-events",
        params={"action": "CANDIDATE_STATUS_UPDATED", "actor_id": staff["id"]},
        headers=headers_for(staff),
    )
    assert response.json()["data"]["total"] == 1
