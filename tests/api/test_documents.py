"""
证明材料 API 测试
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory, headers_for


async def register_document(client: AsyncClient, candidate: dict, doc_type: str = "passport") -> dict:
    response = await client.post(
        "/api/v1/documents",
        json={"type": doc_type, "file_url": f"https://files.example.com/{doc_type}.pdf"},
        headers=headers_for(candidate),
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_register_document(client: AsyncClient, factory: DataFactory):
    candidate = await factory.create_candidate()
    employer = await factory.create_employer()

    document = await register_document(client, candidate)
    assert document["status"] == "pending"
    assert document["is_verified"] is False
    assert document["name"] == "passport"

    response = await client.get("/api/v1/documents/my", headers=headers_for(candidate))
    assert response.json()["data"]["total"] == 1

    response = await client.post(
        "/api/v1/documents",
        json={"type": "diploma", "file_url": "https://files.example.com/d.pdf"},
        headers=headers_for(employer),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_review_documents(client: AsyncClient, factory: DataFactory):
    """运营通过或驳回待审核材料，已审核的不能再次审核"""
    candidate = await factory.create_candidate()
    staff = await factory.create_staff()
    passport = await register_document(client, candidate, "passport")
    diploma = await register_document(client, candidate, "diploma")

    response = await client.get("/api/v1/staff/pending-reviews", headers=headers_for(staff))
    items = response.json()["data"]["items"]
    assert {i["id"] for i in items} == {passport["id"], diploma["id"]}
    assert items[0]["account"]["id"] == candidate["id"]

    response = await client.put(f"/api/v1/staff/documents/{passport['id']}/approve", headers=headers_for(staff))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "verified"
    assert data["is_verified"] is True
    assert data["verified_by"] == staff["id"]

    response = await client.put(
        f"/api/v1/staff/documents/{diploma['id']}/reject",
        json={"reason": "Blurry scan"},
        headers=headers_for(staff),
    )
    assert response.json()["data"]["status"] == "rejected"
    assert response.json()["data"]["rejection_reason"] == "Blurry scan"

    response = await client.put(f"/api/v1/staff/documents/{passport['id']}/approve", headers=headers_for(staff))
    assert response.status_code == 409

    response = await client.put("/api/v1/staff/documents/missing/approve", headers=headers_for(staff))
    assert response.status_code == 404

    response = await client.get("/api/v1/staff/stats", headers=headers_for(staff))
    assert response.json()["data"] == {
        "pending_reviews": 0,
        "approved_today": 1,
        "rejected_documents": 1,
        "total_candidates": 1,
    }

    response = await client.get(f"/api/v1/staff/reviews/{candidate['id']}", headers=headers_for(staff))
    assert len(response.json()["data"]["documents"]) == 2


@pytest.mark.asyncio
async def test_verified_documents_visible_to_staff_not_employers(client: AsyncClient, factory: DataFactory):
    candidate = await factory.create_candidate()
    staff = await factory.create_staff()
    employer = await factory.create_employer()
    passport = await register_document(client, candidate, "passport")
    await register_document(client, candidate, "cv")
    await client.put(f"/api/v1/staff/documents/{passport['id']}/approve", headers=headers_for(staff))

    response = await client.get(f"/api/v1/talent-pool/candidates/{candidate['id']}", headers=headers_for(staff))
    assert [d["id"] for d in response.json()["data"]["documents"]] == [passport["id"]]

    response = await client.get(f"/api/v1/talent-pool/candidates/{candidate['id']}", headers=headers_for(employer))
    assert response.json()["data"]["documents"] == []
