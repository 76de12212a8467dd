"""작업 지시 API 테스트.

Work order API tests — creation with day expansion, service seeding,
validation, status changes and cascading deletion rules.
"""

import uuid
from datetime import date

from httpx import AsyncClient
from sqlalchemy import func, select

URL = "/api/v1/admin/work-orders"


async def _service_with_task(client: AsyncClient, template_id, day_number=None) -> str:
    res = await client.post("/api/v1/admin/services", json={
        "name": "Mantención preventiva",
        "default_days": 3,
        "required_people": 2,
    })
    assert res.status_code == 201
    service_id = res.json()["id"]
    res = await client.post(f"/api/v1/admin/services/{service_id}/task-templates", json={
        "task_template_id": str(template_id),
        "day_number": day_number,
    })
    assert res.status_code == 201
    return service_id


class TestWorkOrderCreate:
    """작업 지시 생성 및 일자 확장 테스트."""

    async def test_expands_one_day_per_calendar_day(self, client: AsyncClient, customer, faena):
        """3일 기간 → day_number 1..3, 날짜 오름차순."""
        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "name": "OT Enero",
            "start_date": "2024-01-01",
            "end_date": "2024-01-03",
            "required_people_per_day": 2,
        })
        assert res.status_code == 201
        data = res.json()
        assert data["status"] == "draft"
        assert data["customer_name"] == "Minera Andina"
        days = data["days"]
        assert [d["day_number"] for d in days] == [1, 2, 3]
        assert [d["day_date"] for d in days] == ["2024-01-01", "2024-01-02", "2024-01-03"]
        assert all(d["required_people"] == 2 for d in days)
        assert all(d["status"] == "pending" for d in days)

    async def test_single_day_range(self, client: AsyncClient, customer, faena):
        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "name": "OT un día",
            "start_date": "2024-02-29",
            "end_date": "2024-02-29",
        })
        assert res.status_code == 201
        assert len(res.json()["days"]) == 1

    async def test_service_seeds_day_tasks_without_instances(
        self, client: AsyncClient, customer, faena, task_template
    ):
        """서비스 작업 1개 → 일자마다 작업 1개, 인스턴스는 아직 없음."""
        service_id = await _service_with_task(client, task_template.id)
        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "service_id": service_id,
            "name": "OT con servicio",
            "start_date": "2024-01-01",
            "end_date": "2024-01-03",
            "required_people_per_day": 2,
        })
        assert res.status_code == 201
        days = res.json()["days"]
        assert len(days) == 3
        for day in days:
            assert day["task_template_count"] == 1
            assert day["task_instance_count"] == 0
            assert day["assignment_count"] == 0

    async def test_seeding_honours_day_number(self, client: AsyncClient, customer, faena, task_template):
        """day_number=2 작업은 2일차에만 생성."""
        service_id = await _service_with_task(client, task_template.id, day_number=2)
        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "service_id": service_id,
            "name": "OT día 2",
            "start_date": "2024-01-01",
            "end_date": "2024-01-03",
        })
        assert res.status_code == 201
        counts = [d["task_template_count"] for d in res.json()["days"]]
        assert counts == [0, 1, 0]

    async def test_from_service_defaults(self, client: AsyncClient, customer, faena, task_template):
        """서비스 기본 이름/인원 적용."""
        service_id = await _service_with_task(client, task_template.id)
        res = await client.post(f"{URL}/from-service", json={
            "service_id": service_id,
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "start_date": "2024-03-01",
            "end_date": "2024-03-02",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "Mantención preventiva - Minera Andina"
        assert data["service_name"] == "Mantención preventiva"
        assert [d["required_people"] for d in data["days"]] == [2, 2]

    async def test_seeded_dependencies_are_same_day(
        self, client: AsyncClient, customer, faena, make_task_template
    ):
        """서비스 의존성은 같은 일자의 작업 사이에만 복사."""
        first = await make_task_template("Bloqueo")
        second = await make_task_template("Limpieza")
        res = await client.post("/api/v1/admin/services", json={"name": "Servicio dependiente"})
        service_id = res.json()["id"]
        a = (await client.post(f"/api/v1/admin/services/{service_id}/task-templates", json={
            "task_template_id": str(first.id),
        })).json()["id"]
        b = (await client.post(f"/api/v1/admin/services/{service_id}/task-templates", json={
            "task_template_id": str(second.id),
            "day_number": 1,
        })).json()["id"]
        res = await client.post("/api/v1/admin/services/dependencies", json={
            "service_task_template_id": b,
            "depends_on_service_task_template_id": a,
        })
        assert res.status_code == 201

        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "service_id": service_id,
            "name": "OT dependencias",
            "start_date": "2024-01-01",
            "end_date": "2024-01-02",
        })
        days = res.json()["days"]
        day1 = await client.get(f"/api/v1/admin/work-order-days/{days[0]['id']}/dependencies")
        day2 = await client.get(f"/api/v1/admin/work-order-days/{days[1]['id']}/dependencies")
        assert len(day1.json()) == 1
        # 2일차에는 B가 없으므로 간선도 없음 — B only exists on day 1
        assert day2.json() == []


class TestWorkOrderValidation:
    """생성 검증 테스트 — 실패 시 아무 것도 남지 않음."""

    async def test_faena_of_other_customer(self, client: AsyncClient, db, faena):
        from app.models.customer import Customer
        from app.models.work_order import WorkOrder

        other = Customer(name="Otro Cliente")
        db.add(other)
        await db.flush()

        res = await client.post(URL, json={
            "customer_id": str(other.id),
            "faena_id": str(faena.id),
            "name": "OT inválida",
            "start_date": "2024-01-01",
            "end_date": "2024-01-02",
        })
        assert res.status_code == 400
        count = (await db.execute(select(func.count()).select_from(WorkOrder))).scalar_one()
        assert count == 0

    async def test_inverted_range(self, client: AsyncClient, customer, faena):
        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "name": "OT invertida",
            "start_date": "2024-01-05",
            "end_date": "2024-01-01",
        })
        assert res.status_code == 400

    async def test_zero_people(self, client: AsyncClient, customer, faena):
        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "name": "OT sin gente",
            "start_date": "2024-01-01",
            "end_date": "2024-01-01",
            "required_people_per_day": 0,
        })
        assert res.status_code == 400

    async def test_range_too_long(self, client: AsyncClient, customer, faena):
        res = await client.post(URL, json={
            "customer_id": str(customer.id),
            "faena_id": str(faena.id),
            "name": "OT eterna",
            "start_date": "2024-01-01",
            "end_date": "2025-12-31",
        })
        assert res.status_code == 400

    async def test_unknown_customer(self, client: AsyncClient, faena):
        res = await client.post(URL, json={
            "customer_id": str(uuid.uuid4()),
            "faena_id": str(faena.id),
            "name": "OT",
            "start_date": "2024-01-01",
            "end_date": "2024-01-01",
        })
        assert res.status_code == 404


class TestWorkOrderReadUpdate:
    """조회/수정 테스트."""

    async def test_list_filters_by_status(self, client: AsyncClient, make_work_order):
        draft = await make_work_order(name="OT borrador")
        scheduled = await make_work_order(name="OT programada")
        res = await client.patch(f"{URL}/{scheduled.id}/status", json={"status": "scheduled"})
        assert res.status_code == 200

        res = await client.get(URL, params={"status": "draft"})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == str(draft.id)

    async def test_invalid_status(self, client: AsyncClient, make_work_order):
        wo = await make_work_order()
        res = await client.patch(f"{URL}/{wo.id}/status", json={"status": "archived"})
        assert res.status_code == 400

    async def test_update_name_and_notes(self, client: AsyncClient, make_work_order):
        wo = await make_work_order()
        res = await client.put(f"{URL}/{wo.id}", json={"name": "OT renombrada", "notes": "Turno noche"})
        assert res.status_code == 200
        assert res.json()["name"] == "OT renombrada"
        assert res.json()["notes"] == "Turno noche"

    async def test_list_days(self, client: AsyncClient, make_work_order):
        wo = await make_work_order(start_date=date(2024, 5, 30), end_date=date(2024, 6, 2))
        res = await client.get(f"{URL}/{wo.id}/days")
        assert res.status_code == 200
        assert [d["day_date"] for d in res.json()] == ["2024-05-30", "2024-05-31", "2024-06-01", "2024-06-02"]

    async def test_get_missing(self, client: AsyncClient):
        res = await client.get(f"{URL}/{uuid.uuid4()}")
        assert res.status_code == 404


class TestWorkOrderDelete:
    """삭제 규칙 테스트 — 초안/취소 상태만 삭제 가능."""

    async def test_delete_draft_cascades(self, client: AsyncClient, db, make_work_order, worker, task_template, days_of):
        from app.models.task_instance import TaskInstance
        from app.models.work_order import WorkOrderDay

        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await client.post(f"/api/v1/admin/work-order-days/{day.id}/task-templates", json={
            "task_template_id": str(task_template.id),
        })
        await client.post(f"/api/v1/admin/work-order-days/{day.id}/assignments", json={"user_id": str(worker.id)})

        res = await client.delete(f"{URL}/{wo.id}")
        assert res.status_code == 200
        days = (await db.execute(select(func.count()).select_from(WorkOrderDay))).scalar_one()
        instances = (await db.execute(select(func.count()).select_from(TaskInstance))).scalar_one()
        assert days == 0
        assert instances == 0

    async def test_delete_cancelled(self, client: AsyncClient, make_work_order):
        wo = await make_work_order()
        await client.patch(f"{URL}/{wo.id}/status", json={"status": "cancelled"})
        res = await client.delete(f"{URL}/{wo.id}")
        assert res.status_code == 200

    async def test_delete_in_progress_refused(self, client: AsyncClient, make_work_order):
        wo = await make_work_order()
        await client.patch(f"{URL}/{wo.id}/status", json={"status": "in_progress"})
        res = await client.delete(f"{URL}/{wo.id}")
        assert res.status_code == 400
        assert (await client.get(f"{URL}/{wo.id}")).status_code == 200
