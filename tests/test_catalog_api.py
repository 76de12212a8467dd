"""카탈로그 API 테스트 — 고객, 현장, 사용자, 서비스.

Catalog API tests — customers, faenas, users and services.
"""

import uuid

from httpx import AsyncClient

from app.services.day_link_service import day_link_service

CUSTOMERS = "/api/v1/admin/customers"
USERS = "/api/v1/admin/users"
SERVICES = "/api/v1/admin/services"


class TestHealth:

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


class TestCustomers:
    """고객 및 현장 테스트."""

    async def test_create_customer_with_faena(self, client: AsyncClient):
        res = await client.post(CUSTOMERS, json={"name": "Codelco Norte", "tax_id": "61.704.000-K"})
        assert res.status_code == 201
        customer_id = res.json()["id"]

        res = await client.post(f"{CUSTOMERS}/{customer_id}/faenas", json={"name": "Chuquicamata"})
        assert res.status_code == 201
        assert res.json()["customer_id"] == customer_id
        assert res.json()["is_active"] is True

        res = await client.get(f"{CUSTOMERS}/{customer_id}/faenas")
        assert [f["name"] for f in res.json()] == ["Chuquicamata"]

    async def test_update_faena(self, client: AsyncClient, faena):
        res = await client.put(f"{CUSTOMERS}/faenas/{faena.id}", json={"is_active": False})
        assert res.status_code == 200
        assert res.json()["is_active"] is False

    async def test_delete_customer_with_work_orders_refused(self, client: AsyncClient, customer, make_work_order):
        await make_work_order()
        res = await client.delete(f"{CUSTOMERS}/{customer.id}")
        assert res.status_code == 400

    async def test_delete_customer(self, client: AsyncClient, customer, faena):
        res = await client.delete(f"{CUSTOMERS}/{customer.id}")
        assert res.status_code == 200
        assert (await client.get(f"{CUSTOMERS}/{customer.id}")).status_code == 404

    async def test_empty_name_rejected(self, client: AsyncClient):
        res = await client.post(CUSTOMERS, json={"name": ""})
        assert res.status_code == 422


class TestUsers:
    """작업자 등록 테스트."""

    async def test_create_and_filter(self, client: AsyncClient):
        res = await client.post(USERS, json={
            "external_id": "auth0|abc",
            "full_name": "Camila Rojas",
            "email": "camila@example.com",
        })
        assert res.status_code == 201
        assert res.json()["is_active"] is True

        res = await client.get(USERS, params={"keyword": "Camila"})
        assert [u["external_id"] for u in res.json()] == ["auth0|abc"]

    async def test_duplicate_external_id(self, client: AsyncClient, worker):
        res = await client.post(USERS, json={"external_id": "u-1", "email": "dup@example.com"})
        assert res.status_code == 400

    async def test_deactivate(self, client: AsyncClient, worker):
        res = await client.put(f"{USERS}/{worker.id}", json={"is_active": False})
        assert res.status_code == 200
        assert res.json()["is_active"] is False

    async def test_missing_user(self, client: AsyncClient):
        res = await client.get(f"{USERS}/{uuid.uuid4()}")
        assert res.status_code == 404


class TestServices:
    """서비스 및 서비스 작업 테스트."""

    async def test_service_task_lifecycle(self, client: AsyncClient, task_template):
        res = await client.post(SERVICES, json={"name": "Lavado de paneles", "default_days": 2})
        assert res.status_code == 201
        service_id = res.json()["id"]

        res = await client.post(f"{SERVICES}/{service_id}/task-templates", json={
            "task_template_id": str(task_template.id),
            "day_number": 2,
            "is_required": True,
        })
        assert res.status_code == 201
        service_task = res.json()
        assert service_task["task_template_name"] == "Inspección de equipos"
        assert service_task["order"] == 0

        res = await client.post(f"{SERVICES}/{service_id}/task-templates", json={
            "task_template_id": str(task_template.id),
        })
        assert res.status_code == 400

        res = await client.put(f"{SERVICES}/task-templates/{service_task['id']}", json={"day_number": 1})
        assert res.json()["day_number"] == 1

        res = await client.delete(f"{SERVICES}/task-templates/{service_task['id']}")
        assert res.status_code == 200
        assert res.json()["is_active"] is False
        res = await client.get(f"{SERVICES}/{service_id}/task-templates")
        assert res.json() == []

    async def test_invalid_day_number(self, client: AsyncClient, service, task_template):
        res = await client.post(f"{SERVICES}/{service.id}/task-templates", json={
            "task_template_id": str(task_template.id),
            "day_number": 0,
        })
        assert res.status_code == 400

    async def test_delete_service_in_use_refused(self, client: AsyncClient, service, make_work_order):
        await make_work_order(service_id=service.id)
        res = await client.delete(f"{SERVICES}/{service.id}")
        assert res.status_code == 400

    async def test_delete_service_linked_to_day_refused(self, client: AsyncClient, db, service, make_work_order, days_of):
        """작업 지시 없이 일자에만 연결된 서비스도 삭제 불가 (제거된 연결 포함)."""
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        link = await day_link_service.add_service_to_day(db, day.id, service.id)

        res = await client.delete(f"{SERVICES}/{service.id}")
        assert res.status_code == 400

        await day_link_service.remove_service_from_day(db, link.id)
        res = await client.delete(f"{SERVICES}/{service.id}")
        assert res.status_code == 400
        assert (await client.get(f"{SERVICES}/{service.id}")).status_code == 200

    async def test_update_service(self, client: AsyncClient, service):
        res = await client.put(f"{SERVICES}/{service.id}", json={"required_people": 5})
        assert res.status_code == 200
        assert res.json()["required_people"] == 5
