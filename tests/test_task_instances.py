"""작업자 API 테스트 — 내 일자, 내 작업, 필드 응답, 완료 처리.

Worker-facing API tests: my days, my tasks, field responses and marking an
instance complete. Workers are identified by the X-User-Id header.
"""

from datetime import date

import pytest_asyncio
from httpx import AsyncClient

from app.services.assignment_service import assignment_service
from app.services.day_link_service import day_link_service
from app.services.task_template_service import task_template_service

DAYS = "/api/v1/app/my/days"
TASKS = "/api/v1/app/my/tasks"


def worker_header(identity: str = "u-1") -> dict[str, str]:
    return {"X-User-Id": identity}


@pytest_asyncio.fixture
async def assigned(db, make_work_order, days_of, task_template, worker) -> dict:
    """필드가 있는 작업 템플릿을 1일차에 연결하고 작업자를 배정합니다.

    Fields: required number, required displayText, optional text.
    """
    number = await task_template_service.create_field(db, task_template.id, {
        "label": "Presión (bar)", "field_type": "number", "is_required": True,
    })
    notice = await task_template_service.create_field(db, task_template.id, {
        "label": "Use EPP completo", "field_type": "displayText", "is_required": True,
    })
    notes = await task_template_service.create_field(db, task_template.id, {
        "label": "Comentarios", "field_type": "text", "is_required": False,
    })
    wo = await make_work_order(start_date=date(2024, 4, 1), end_date=date(2024, 4, 2))
    day = (await days_of(wo))[0]
    await day_link_service.add_task_template_to_day(db, day.id, task_template.id)
    await assignment_service.assign_user(db, day.id, worker.id)
    await db.commit()
    return {"day": day, "number": number, "notice": notice, "notes": notes}


async def _my_instance_id(client: AsyncClient, day_id) -> str:
    res = await client.get(f"{DAYS}/{day_id}/tasks", headers=worker_header())
    assert res.status_code == 200
    assert len(res.json()) == 1
    return res.json()[0]["id"]


class TestWorkerIdentity:
    """X-User-Id 식별 테스트."""

    async def test_missing_header(self, client: AsyncClient):
        res = await client.get(DAYS)
        assert res.status_code == 401

    async def test_unknown_user(self, client: AsyncClient, worker):
        res = await client.get(DAYS, headers=worker_header("ghost"))
        assert res.status_code == 401

    async def test_inactive_user(self, client: AsyncClient, make_user):
        await make_user("u-gone", is_active=False)
        res = await client.get(DAYS, headers=worker_header("u-gone"))
        assert res.status_code == 401


class TestMyDays:
    """내 일자 / 내 작업 조회 테스트."""

    async def test_list_my_days(self, client: AsyncClient, assigned):
        res = await client.get(DAYS, headers=worker_header())
        assert res.status_code == 200
        days = res.json()
        assert len(days) == 1
        assert days[0]["day_date"] == "2024-04-01"
        assert days[0]["task_instance_count"] == 1

    async def test_date_window(self, client: AsyncClient, assigned):
        res = await client.get(DAYS, params={"date_from": "2024-04-02"}, headers=worker_header())
        assert res.json() == []

    async def test_other_worker_sees_nothing(self, client: AsyncClient, assigned, make_user):
        await make_user("u-2")
        res = await client.get(f"{DAYS}/{assigned['day'].id}/tasks", headers=worker_header("u-2"))
        assert res.status_code == 200
        assert res.json() == []

    async def test_detail_lists_fields(self, client: AsyncClient, assigned):
        instance_id = await _my_instance_id(client, assigned["day"].id)
        res = await client.get(f"{TASKS}/{instance_id}", headers=worker_header())
        assert res.status_code == 200
        data = res.json()
        assert data["instance_label"] == "Inspección de equipos"
        assert [f["label"] for f in data["fields"]] == ["Presión (bar)", "Use EPP completo", "Comentarios"]
        assert all(f["value"] is None for f in data["fields"])

    async def test_detail_of_other_worker(self, client: AsyncClient, assigned, make_user):
        instance_id = await _my_instance_id(client, assigned["day"].id)
        await make_user("u-2")
        res = await client.get(f"{TASKS}/{instance_id}", headers=worker_header("u-2"))
        assert res.status_code == 404


class TestFieldResponses:
    """필드 응답 저장 테스트."""

    async def test_upsert_response(self, client: AsyncClient, assigned):
        instance_id = await _my_instance_id(client, assigned["day"].id)
        url = f"{TASKS}/{instance_id}/responses"
        body = {"field_template_id": str(assigned["number"].id), "value": "7.5"}

        res = await client.put(url, json=body, headers=worker_header())
        assert res.status_code == 200
        assert res.json()["answered_by"] == "u-1"
        first_id = res.json()["id"]

        res = await client.put(url, json={**body, "value": "8"}, headers=worker_header())
        assert res.json()["id"] == first_id
        assert res.json()["value"] == "8"

        res = await client.get(f"{TASKS}/{instance_id}", headers=worker_header())
        assert res.json()["started_at"] is not None
        assert res.json()["fields"][0]["value"] == "8"

    async def test_field_of_other_template(self, client: AsyncClient, db, assigned, make_task_template):
        other = await make_task_template("Otra tarea")
        foreign = await task_template_service.create_field(db, other.id, {"label": "X", "field_type": "text"})
        instance_id = await _my_instance_id(client, assigned["day"].id)
        res = await client.put(f"{TASKS}/{instance_id}/responses", json={
            "field_template_id": str(foreign.id), "value": "x",
        }, headers=worker_header())
        assert res.status_code == 400


class TestMarkComplete:
    """완료 처리 테스트."""

    async def test_required_field_missing(self, client: AsyncClient, assigned):
        instance_id = await _my_instance_id(client, assigned["day"].id)
        res = await client.post(f"{TASKS}/{instance_id}/complete", headers=worker_header())
        assert res.status_code == 400

    async def test_blank_answer_does_not_count(self, client: AsyncClient, assigned):
        instance_id = await _my_instance_id(client, assigned["day"].id)
        await client.put(f"{TASKS}/{instance_id}/responses", json={
            "field_template_id": str(assigned["number"].id), "value": "   ",
        }, headers=worker_header())
        res = await client.post(f"{TASKS}/{instance_id}/complete", headers=worker_header())
        assert res.status_code == 400

    async def test_complete_then_read_only(self, client: AsyncClient, assigned):
        """displayText 필수 필드는 건너뛰고 완료, 이후 수정 불가."""
        instance_id = await _my_instance_id(client, assigned["day"].id)
        await client.put(f"{TASKS}/{instance_id}/responses", json={
            "field_template_id": str(assigned["number"].id), "value": "6",
        }, headers=worker_header())

        res = await client.post(f"{TASKS}/{instance_id}/complete", headers=worker_header())
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "completed"
        assert data["completed_at"] is not None
        assert data["completed_tz"] == "America/Santiago"

        res = await client.put(f"{TASKS}/{instance_id}/responses", json={
            "field_template_id": str(assigned["notes"].id), "value": "tarde",
        }, headers=worker_header())
        assert res.status_code == 400

        res = await client.post(f"{TASKS}/{instance_id}/complete", headers=worker_header())
        assert res.status_code == 400

    async def test_client_timezone(self, client: AsyncClient, assigned):
        instance_id = await _my_instance_id(client, assigned["day"].id)
        await client.put(f"{TASKS}/{instance_id}/responses", json={
            "field_template_id": str(assigned["number"].id), "value": "6",
        }, headers=worker_header())

        res = await client.post(f"{TASKS}/{instance_id}/complete", json={
            "client_timezone": "Mars/Olympus",
        }, headers=worker_header())
        assert res.status_code == 400

        res = await client.post(f"{TASKS}/{instance_id}/complete", json={
            "client_timezone": "America/Punta_Arenas",
        }, headers=worker_header())
        assert res.status_code == 200
        assert res.json()["completed_tz"] == "America/Punta_Arenas"

    async def test_completed_instance_counted_on_day(self, client: AsyncClient, assigned):
        instance_id = await _my_instance_id(client, assigned["day"].id)
        await client.put(f"{TASKS}/{instance_id}/responses", json={
            "field_template_id": str(assigned["number"].id), "value": "6",
        }, headers=worker_header())
        await client.post(f"{TASKS}/{instance_id}/complete", headers=worker_header())

        res = await client.get(f"/api/v1/admin/work-order-days/{assigned['day'].id}")
        assert res.json()["completed_instance_count"] == 1
