"""서비스 작업 의존성 API 테스트.

Service task dependency API tests — validation order, cycle rejection and
edge removal.
"""

import uuid

import pytest_asyncio
from httpx import AsyncClient

SERVICES = "/api/v1/admin/services"
URL = f"{SERVICES}/dependencies"


@pytest_asyncio.fixture
async def service_tasks(client: AsyncClient, service, make_task_template) -> dict[str, str]:
    """서비스 작업 A, B, C를 생성합니다."""
    ids: dict[str, str] = {}
    for key in ("A", "B", "C"):
        template = await make_task_template(f"Tarea {key}")
        res = await client.post(f"{SERVICES}/{service.id}/task-templates", json={
            "task_template_id": str(template.id),
        })
        assert res.status_code == 201
        ids[key] = res.json()["id"]
    return ids


def _edge(dependent: str, prerequisite: str) -> dict:
    return {
        "service_task_template_id": dependent,
        "depends_on_service_task_template_id": prerequisite,
    }


class TestDependencyCreate:
    """의존성 생성 테스트."""

    async def test_cycle_rejected(self, client: AsyncClient, service, service_tasks):
        """B → A 후 A → B 는 409, 간선은 하나만 남음."""
        res = await client.post(URL, json=_edge(service_tasks["B"], service_tasks["A"]))
        assert res.status_code == 201
        assert res.json()["service_id"] == str(service.id)

        res = await client.post(URL, json=_edge(service_tasks["A"], service_tasks["B"]))
        assert res.status_code == 409

        res = await client.get(f"{SERVICES}/{service.id}/dependencies")
        edges = res.json()
        assert len(edges) == 1
        assert edges[0]["service_task_template_id"] == service_tasks["B"]

    async def test_transitive_cycle_rejected(self, client: AsyncClient, service_tasks):
        await client.post(URL, json=_edge(service_tasks["B"], service_tasks["A"]))
        await client.post(URL, json=_edge(service_tasks["C"], service_tasks["B"]))
        res = await client.post(URL, json=_edge(service_tasks["A"], service_tasks["C"]))
        assert res.status_code == 409

    async def test_self_edge(self, client: AsyncClient, service_tasks):
        res = await client.post(URL, json=_edge(service_tasks["A"], service_tasks["A"]))
        assert res.status_code == 400

    async def test_duplicate_edge(self, client: AsyncClient, service_tasks):
        res = await client.post(URL, json=_edge(service_tasks["B"], service_tasks["A"]))
        assert res.status_code == 201
        res = await client.post(URL, json=_edge(service_tasks["B"], service_tasks["A"]))
        assert res.status_code == 400

    async def test_cross_service_edge(self, client: AsyncClient, service_tasks, make_task_template):
        res = await client.post(SERVICES, json={"name": "Otro servicio"})
        other_service = res.json()["id"]
        template = await make_task_template("Tarea ajena")
        res = await client.post(f"{SERVICES}/{other_service}/task-templates", json={
            "task_template_id": str(template.id),
        })
        foreign = res.json()["id"]

        res = await client.post(URL, json=_edge(service_tasks["A"], foreign))
        assert res.status_code == 400

    async def test_missing_prerequisite(self, client: AsyncClient, service_tasks):
        res = await client.post(URL, json=_edge(service_tasks["A"], str(uuid.uuid4())))
        assert res.status_code == 404


class TestDependencyRemove:
    """의존성 삭제 테스트."""

    async def test_remove_edge(self, client: AsyncClient, service, service_tasks):
        res = await client.post(URL, json=_edge(service_tasks["B"], service_tasks["A"]))
        edge_id = res.json()["id"]
        res = await client.delete(f"{URL}/{edge_id}")
        assert res.status_code == 200
        res = await client.get(f"{SERVICES}/{service.id}/dependencies")
        assert res.json() == []

    async def test_remove_all_for_task(self, client: AsyncClient, service, service_tasks):
        """작업이 양쪽 어디에 있든 간선 삭제."""
        await client.post(URL, json=_edge(service_tasks["B"], service_tasks["A"]))
        await client.post(URL, json=_edge(service_tasks["C"], service_tasks["B"]))
        await client.post(URL, json=_edge(service_tasks["C"], service_tasks["A"]))

        res = await client.delete(f"{SERVICES}/task-templates/{service_tasks['B']}/dependencies")
        assert res.status_code == 200
        res = await client.get(f"{SERVICES}/{service.id}/dependencies")
        remaining = res.json()
        assert len(remaining) == 1
        assert remaining[0]["service_task_template_id"] == service_tasks["C"]
        assert remaining[0]["depends_on_service_task_template_id"] == service_tasks["A"]

    async def test_list_for_dependent(self, client: AsyncClient, service_tasks):
        await client.post(URL, json=_edge(service_tasks["C"], service_tasks["A"]))
        await client.post(URL, json=_edge(service_tasks["C"], service_tasks["B"]))
        res = await client.get(f"{SERVICES}/task-templates/{service_tasks['C']}/dependencies")
        assert res.status_code == 200
        assert {e["depends_on_service_task_template_id"] for e in res.json()} == {
            service_tasks["A"], service_tasks["B"],
        }
