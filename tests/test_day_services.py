"""작업 일자 연결 API 테스트.

Work order day link API tests — linking services and task templates,
soft removal with orphan counts, reordering and day updates.
"""

import uuid

from httpx import AsyncClient

from app.models.task_instance import TaskInstance
from app.repositories.task_instance_repository import task_instance_repository

URL = "/api/v1/admin/work-order-days"


class TestDayServiceLinks:
    """일자-서비스 연결 테스트."""

    async def test_remove_link_reports_orphaned_instances(
        self, client: AsyncClient, db, make_work_order, days_of, service, make_task_template, worker
    ):
        """완료된 인스턴스가 있는 연결 제거 → 비활성, orphaned_count=1, 인스턴스 유지."""
        done = await make_task_template("Inspección")
        untouched = await make_task_template("Registro fotográfico")
        for template in (done, untouched):
            res = await client.post(f"/api/v1/admin/services/{service.id}/task-templates", json={
                "task_template_id": str(template.id),
            })
            assert res.status_code == 201
        wo = await make_work_order()
        day = (await days_of(wo))[0]

        res = await client.post(f"{URL}/{day.id}/services", json={"service_id": str(service.id)})
        assert res.status_code == 201
        link_id = res.json()["id"]
        res = await client.post(f"{URL}/{day.id}/assignments", json={"user_id": str(worker.id)})
        assert res.status_code == 201

        instances = await task_instance_repository.get_by_day(db, day.id)
        assert len(instances) == 2
        completed: TaskInstance = next(i for i in instances if i.task_template_id == done.id)
        await task_instance_repository.update(db, completed.id, {"status": "completed"})
        await db.commit()

        res = await client.delete(f"{URL}/services/{link_id}")
        assert res.status_code == 200
        assert res.json()["orphaned_count"] == 1

        res = await client.get(f"{URL}/{day.id}/services")
        assert res.json() == []
        res = await client.get(f"{URL}/{day.id}/services", params={"include_inactive": True})
        assert res.json()[0]["is_active"] is False

        kept = await task_instance_repository.get_by_id(db, completed.id)
        assert kept is not None
        assert kept.status == "completed"
        assert len(await task_instance_repository.get_by_day(db, day.id)) == 2

        res = await client.get(f"{URL}/{day.id}/orphaned-instances")
        assert res.status_code == 200
        assert len(res.json()) == 2

    async def test_duplicate_active_link(self, client: AsyncClient, make_work_order, days_of, service):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        res = await client.post(f"{URL}/{day.id}/services", json={"service_id": str(service.id)})
        assert res.status_code == 201
        res = await client.post(f"{URL}/{day.id}/services", json={"service_id": str(service.id)})
        assert res.status_code == 400

    async def test_remove_missing_link(self, client: AsyncClient):
        res = await client.delete(f"{URL}/services/{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_partial_reorder(self, client: AsyncClient, db, make_work_order, days_of):
        """부분 목록 재정렬 — 나열된 연결만 변경."""
        from app.models.service import Service

        wo = await make_work_order()
        day = (await days_of(wo))[0]
        link_ids = []
        for name in ("Servicio A", "Servicio B", "Servicio C"):
            s = Service(name=name)
            db.add(s)
            await db.flush()
            res = await client.post(f"{URL}/{day.id}/services", json={"service_id": str(s.id)})
            link_ids.append(res.json()["id"])

        res = await client.get(f"{URL}/{day.id}/services")
        assert [link["order"] for link in res.json()] == [0, 1, 2]

        res = await client.put(f"{URL}/{day.id}/services/reorder", json={"ids": [link_ids[2], link_ids[0]]})
        assert res.status_code == 200
        orders = {link["id"]: link["order"] for link in res.json()}
        assert orders[link_ids[2]] == 0
        assert orders[link_ids[0]] == 1
        assert orders[link_ids[1]] == 1

    async def test_reorder_foreign_link(self, client: AsyncClient, make_work_order, days_of, service):
        wo = await make_work_order()
        day1, day2 = (await days_of(wo))[:2]
        res = await client.post(f"{URL}/{day1.id}/services", json={"service_id": str(service.id)})
        link_id = res.json()["id"]
        res = await client.put(f"{URL}/{day2.id}/services/reorder", json={"ids": [link_id]})
        assert res.status_code == 400


class TestDayTaskTemplateLinks:
    """일자-작업 템플릿 연결 테스트."""

    async def test_add_and_remove(self, client: AsyncClient, make_work_order, days_of, task_template, worker):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await client.post(f"{URL}/{day.id}/assignments", json={"user_id": str(worker.id)})

        res = await client.post(f"{URL}/{day.id}/task-templates", json={
            "task_template_id": str(task_template.id),
            "is_required": True,
        })
        assert res.status_code == 201
        assert res.json()["task_template_name"] == "Inspección de equipos"

        res = await client.get(f"{URL}/{day.id}/task-instances")
        assert len(res.json()) == 1
        assert res.json()[0]["origin_type"] == "standalone"

        res = await client.delete(f"{URL}/{day.id}/task-templates/{task_template.id}")
        assert res.status_code == 200
        # 작업 기록이 없으므로 0 — No responses, not completed
        assert res.json()["orphaned_count"] == 0
        res = await client.get(f"{URL}/{day.id}/task-instances")
        assert len(res.json()) == 1

    async def test_remove_unlinked_template(self, client: AsyncClient, make_work_order, days_of, task_template):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        res = await client.delete(f"{URL}/{day.id}/task-templates/{task_template.id}")
        assert res.status_code == 404


class TestDayUpdates:
    """일자 상태/메모/인원 수정 테스트."""

    async def test_status_notes_people(self, client: AsyncClient, make_work_order, days_of):
        wo = await make_work_order()
        day = (await days_of(wo))[0]

        res = await client.patch(f"{URL}/{day.id}/status", json={"status": "in_progress"})
        assert res.status_code == 200
        assert res.json()["status"] == "in_progress"

        res = await client.patch(f"{URL}/{day.id}/notes", json={"notes": "Lluvia"})
        assert res.json()["notes"] == "Lluvia"

        res = await client.patch(f"{URL}/{day.id}/required-people", json={"required_people": 4})
        assert res.json()["required_people"] == 4

    async def test_invalid_day_status(self, client: AsyncClient, make_work_order, days_of):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        res = await client.patch(f"{URL}/{day.id}/status", json={"status": "cancelled"})
        assert res.status_code == 400

    async def test_day_detail_lists_assignees(self, client: AsyncClient, make_work_order, days_of, worker):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await client.post(f"{URL}/{day.id}/assignments", json={"user_id": str(worker.id)})
        res = await client.get(f"{URL}/{day.id}")
        assert res.status_code == 200
        data = res.json()
        assert data["assignment_count"] == 1
        assert data["assignments"][0]["user_external_id"] == "u-1"

    async def test_inactive_user_cannot_be_assigned(self, client: AsyncClient, make_work_order, days_of, make_user):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        retired = await make_user("u-retired", is_active=False)
        res = await client.post(f"{URL}/{day.id}/assignments", json={"user_id": str(retired.id)})
        assert res.status_code == 400
