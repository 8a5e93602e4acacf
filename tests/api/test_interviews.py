"""
面试安排 API 测试

时间段答复、状态机与管道同步
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory, headers_for


async def answer(client: AsyncClient, viewer: dict, interview_id: str, slot_id: str, accepted: bool = True):
    return await client.put(
        f"/api/v1/interviews/{interview_id}/respond",
        json={"slot_id": slot_id, "accepted": accepted},
        headers=headers_for(viewer),
    )


async def transition(client: AsyncClient, viewer: dict, interview_id: str, action: str):
    return await client.put(f"/api/v1/interviews/{interview_id}/{action}", headers=headers_for(viewer))


@pytest.mark.asyncio
async def test_schedule_creates_pending_interview(factory: DataFactory):
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()

    interview = await factory.create_interview(employer, candidate)

    assert interview["status"] == "pending"
    assert interview["employer_id"] == employer["id"]
    assert interview["candidate_id"] == candidate["id"]
    assert interview["confirmed_time"] is None
    assert interview["meeting_room_id"].startswith("wdf-")

    slots = interview["proposed_times"]
    assert len(slots) == 2
    assert slots[0]["id"].startswith("slot-0-")
    assert slots[1]["id"].startswith("slot-1-")
    assert all(s["accepted"] is False for s in slots)
    assert all(s["proposed_by"] == employer["id"] for s in slots)


@pytest.mark.asyncio
async def test_schedule_validation(client: AsyncClient, factory: DataFactory):
    """没有时间段 400；缺少对方 400；对方不存在 404"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    staff = await factory.create_staff()

    response = await client.post(
        "/api/v1/interviews",
        json={"candidate_id": candidate["id"], "title": "Call", "proposed_times": []},
        headers=headers_for(employer),
    )
    assert response.status_code == 400

    response = await client.post(
        "/api/v1/interviews",
        json={"candidate_id": candidate["id"], "title": "Call", "proposed_times": [{"datetime": "2025-03-01T10:00:00Z"}]},
        headers=headers_for(staff),
    )
    assert response.status_code == 400

    response = await client.post(
        "/api/v1/interviews",
        json={"candidate_id": "missing", "title": "Call", "proposed_times": [{"datetime": "2025-03-01T10:00:00Z"}]},
        headers=headers_for(employer),
    )
    assert response.status_code == 404

    response = await client.post(
        "/api/v1/interviews",
        json={"candidate_id": candidate["id"], "title": "Call", "proposed_times": [{"datetime": "next tuesday"}]},
        headers=headers_for(employer),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_accept_second_slot_confirms(client: AsyncClient, factory: DataFactory):
    """接受第二个时间段: confirmed，确认时间等于该时间段，第一个保持未接受"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    interview = await factory.create_interview(employer, candidate)
    first, second = interview["proposed_times"]

    response = await answer(client, candidate, interview["id"], second["id"])
    assert response.status_code == 200
    data = response.json()["data"]

    assert data["status"] == "confirmed"
    assert data["confirmed_time"] == second["datetime"]
    slots = {s["id"]: s for s in data["proposed_times"]}
    assert slots[second["id"]]["accepted"] is True
    assert slots[first["id"]]["accepted"] is False


@pytest.mark.asyncio
async def test_slot_answer_rules(client: AsyncClient, factory: DataFactory):
    """拒绝不改变状态；未知时间段 400；已接受其他时间段时冲突"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    interview = await factory.create_interview(employer, candidate)
    first, second = interview["proposed_times"]

    response = await answer(client, candidate, interview["id"], first["id"], accepted=False)
    assert response.json()["data"]["status"] == "pending"

    response = await answer(client, candidate, interview["id"], "slot-9-deadbeef")
    assert response.status_code == 400

    await answer(client, candidate, interview["id"], first["id"])
    response = await answer(client, candidate, interview["id"], second["id"])
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_complete_syncs_pipeline(client: AsyncClient, factory: DataFactory):
    """完成面试后管道阶段为 interviewed（无记录时新建）"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    interview = await factory.create_interview(employer, candidate)

    response = await transition(client, employer, interview["id"], "complete")
    assert response.status_code == 409

    await answer(client, candidate, interview["id"], interview["proposed_times"][0]["id"])
    response = await transition(client, employer, interview["id"], "complete")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "completed"

    response = await client.get("/api/v1/talent-pool/my-relations", headers=headers_for(employer))
    relations = response.json()["data"]["items"]
    assert len(relations) == 1
    assert relations[0]["candidate_id"] == candidate["id"]
    assert relations[0]["status"] == "interviewed"


@pytest.mark.asyncio
async def test_complete_overrides_hired(client: AsyncClient, factory: DataFactory):
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()
    await client.put(
        f"/api/v1/talent-pool/relations/{candidate['id']}/status",
        json={"status": "hired"},
        headers=headers_for(employer),
    )
    interview = await factory.create_interview(employer, candidate)
    await answer(client, candidate, interview["id"], interview["proposed_times"][0]["id"])
    await transition(client, candidate, interview["id"], "complete")

    response = await client.get("/api/v1/talent-pool/my-relations", headers=headers_for(employer))
    assert response.json()["data"]["items"][0]["status"] == "interviewed"


@pytest.mark.asyncio
async def test_terminal_states(client: AsyncClient, factory: DataFactory):
    """已完成的面试不能取消；已取消的面试不能再答复"""
    employer = await factory.create_employer()
    candidate = await factory.create_candidate()

    done = await factory.create_interview(employer, candidate)
    await answer(client, candidate, done["id"], done["proposed_times"][0]["id"])
    await transition(client, employer, done["id"], "complete")
    response = await transition(client, employer, done["id"], "cancel")
    assert response.status_code == 409

    cancelled = await factory.create_interview(employer, candidate)
    response = await transition(client, candidate, cancelled["id"], "cancel")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "cancelled"

    response = await answer(client, candidate, cancelled["id"], cancelled["proposed_times"][0]["id"])
    assert response.status_code == 409
    response = await transition(client, employer, cancelled["id"], "complete")
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_interview_views_by_role(client: AsyncClient, factory: DataFactory):
    """雇主视角没有候选人头像；非参与方 403"""
    employer = await factory.create_employer()
    outsider = await factory.create_employer()
    staff = await factory.create_staff()
    candidate = await factory.create_candidate()
    interview = await factory.create_interview(employer, candidate)

    data = (await client.get(f"/api/v1/interviews/{interview['id']}", headers=headers_for(employer))).json()["data"]
    assert "candidate_avatar" not in data
    assert "avatar_url" not in data["candidate"]
    assert data["employer_name"] == employer["company_name"]

    data = (await client.get(f"/api/v1/interviews/{interview['id']}", headers=headers_for(candidate))).json()["data"]
    assert data["candidate_avatar"] == candidate["avatar_url"]

    response = await client.get(f"/api/v1/interviews/{interview['id']}", headers=headers_for(outsider))
    assert response.status_code == 403

    response = await client.get("/api/v1/interviews", headers=headers_for(staff))
    assert response.json()["data"]["total"] == 1
    response = await client.get("/api/v1/interviews", headers=headers_for(employer))
    assert response.status_code == 403

    response = await client.get("/api/v1/interviews/my", params={"status": "pending"}, headers=headers_for(candidate))
    assert response.json()["data"]["total"] == 1
