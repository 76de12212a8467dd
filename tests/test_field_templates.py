"""작업 템플릿 / 필드 / 조건 / 조회 엔티티 API 테스트.

Task template, field template, field condition and lookup entity API tests.
Covers order compaction after deletes, partial reorders and condition rules.
"""

import uuid

import pytest_asyncio
from httpx import AsyncClient

URL = "/api/v1/admin/task-templates"
LOOKUPS = "/api/v1/admin/lookups"


@pytest_asyncio.fixture
async def template_with_fields(client: AsyncClient) -> tuple[str, list[str]]:
    """필드 3개(0, 1, 2)를 가진 템플릿."""
    res = await client.post(URL, json={"name": "Checklist grúa", "category": "seguridad"})
    assert res.status_code == 201
    template_id = res.json()["id"]
    field_ids = []
    for label, field_type in (("Operativa", "boolean"), ("Horómetro", "number"), ("Observaciones", "text")):
        res = await client.post(f"{URL}/{template_id}/fields", json={
            "label": label,
            "field_type": field_type,
            "is_required": field_type != "text",
        })
        assert res.status_code == 201
        field_ids.append(res.json()["id"])
    return template_id, field_ids


class TestTaskTemplateCrud:
    """작업 템플릿 CRUD 테스트."""

    async def test_create_and_filter(self, client: AsyncClient, template_with_fields):
        await client.post(URL, json={"name": "Reporte diario", "category": "reportes"})
        res = await client.get(URL, params={"category": "seguridad"})
        assert res.status_code == 200
        assert [t["name"] for t in res.json()] == ["Checklist grúa"]

    async def test_delete_linked_template_refused(self, client: AsyncClient, service, task_template):
        await client.post(f"/api/v1/admin/services/{service.id}/task-templates", json={
            "task_template_id": str(task_template.id),
        })
        res = await client.delete(f"{URL}/{task_template.id}")
        assert res.status_code == 400

    async def test_delete_unlinked_template(self, client: AsyncClient, template_with_fields):
        template_id, _ = template_with_fields
        res = await client.delete(f"{URL}/{template_id}")
        assert res.status_code == 200
        assert (await client.get(f"{URL}/{template_id}")).status_code == 404


class TestFieldTemplates:
    """필드 템플릿 테스트."""

    async def test_fields_are_appended_in_order(self, client: AsyncClient, template_with_fields):
        template_id, field_ids = template_with_fields
        res = await client.get(f"{URL}/{template_id}/fields")
        assert [f["id"] for f in res.json()] == field_ids
        assert [f["order"] for f in res.json()] == [0, 1, 2]

    async def test_delete_compacts_order(self, client: AsyncClient, template_with_fields):
        """order=1 삭제 → 남은 필드 0, 1."""
        template_id, field_ids = template_with_fields
        res = await client.delete(f"{URL}/fields/{field_ids[1]}")
        assert res.status_code == 200

        res = await client.get(f"{URL}/{template_id}/fields")
        fields = res.json()
        assert [f["id"] for f in fields] == [field_ids[0], field_ids[2]]
        assert [f["order"] for f in fields] == [0, 1]

    async def test_invalid_field_type(self, client: AsyncClient, template_with_fields):
        template_id, _ = template_with_fields
        res = await client.post(f"{URL}/{template_id}/fields", json={"label": "X", "field_type": "signature"})
        assert res.status_code == 400

    async def test_partial_reorder(self, client: AsyncClient, template_with_fields):
        template_id, field_ids = template_with_fields
        res = await client.put(f"{URL}/{template_id}/fields/reorder", json={"ids": [field_ids[2]]})
        assert res.status_code == 200
        orders = {f["id"]: f["order"] for f in res.json()}
        assert orders == {field_ids[0]: 0, field_ids[1]: 1, field_ids[2]: 0}

    async def test_update_field_ignores_order(self, client: AsyncClient, template_with_fields):
        _, field_ids = template_with_fields
        res = await client.put(f"{URL}/fields/{field_ids[0]}", json={"label": "¿Operativa?", "order": 7})
        assert res.status_code == 200
        assert res.json()["label"] == "¿Operativa?"
        assert res.json()["order"] == 0


class TestFieldConditions:
    """필드 조건 테스트."""

    async def test_create_and_cascade_on_field_delete(self, client: AsyncClient, template_with_fields):
        template_id, field_ids = template_with_fields
        res = await client.post(f"{URL}/conditions", json={
            "child_field_id": field_ids[2],
            "parent_field_id": field_ids[0],
            "operator": "equals",
            "value": "false",
        })
        assert res.status_code == 201

        res = await client.get(f"{URL}/{template_id}/conditions")
        assert len(res.json()) == 1

        await client.delete(f"{URL}/fields/{field_ids[0]}")
        res = await client.get(f"{URL}/{template_id}/conditions")
        assert res.json() == []

    async def test_parent_must_come_first(self, client: AsyncClient, template_with_fields):
        _, field_ids = template_with_fields
        res = await client.post(f"{URL}/conditions", json={
            "child_field_id": field_ids[0],
            "parent_field_id": field_ids[2],
            "operator": "isNotEmpty",
            "value": "",
        })
        assert res.status_code == 400

    async def test_includes_needs_list(self, client: AsyncClient, template_with_fields):
        _, field_ids = template_with_fields
        body = {
            "child_field_id": field_ids[2],
            "parent_field_id": field_ids[1],
            "operator": "includes",
            "value": "10",
        }
        res = await client.post(f"{URL}/conditions", json=body)
        assert res.status_code == 400
        res = await client.post(f"{URL}/conditions", json={**body, "value": ["10", "20"]})
        assert res.status_code == 201
        assert res.json()["value"] == ["10", "20"]

    async def test_unknown_operator(self, client: AsyncClient, template_with_fields):
        _, field_ids = template_with_fields
        res = await client.post(f"{URL}/conditions", json={
            "child_field_id": field_ids[1],
            "parent_field_id": field_ids[0],
            "operator": "matches",
            "value": "x",
        })
        assert res.status_code == 400

    async def test_delete_missing_condition(self, client: AsyncClient):
        res = await client.delete(f"{URL}/conditions/{uuid.uuid4()}")
        assert res.status_code == 404


class TestLookupEntities:
    """조회 엔티티 테스트."""

    async def test_delete_compacts_display_order(self, client: AsyncClient):
        res = await client.post(f"{LOOKUPS}/entity-types", json={"name": "Equipos"})
        assert res.status_code == 201
        type_id = res.json()["id"]
        ids = []
        for value in ("Grúa horquilla", "Camión aljibe", "Excavadora"):
            res = await client.post(f"{LOOKUPS}/entity-types/{type_id}/entities", json={"value": value})
            assert res.status_code == 201
            ids.append(res.json()["id"])

        res = await client.delete(f"{LOOKUPS}/entities/{ids[0]}")
        assert res.status_code == 200

        res = await client.get(f"{LOOKUPS}/entity-types/{type_id}/entities")
        entities = res.json()
        assert [e["value"] for e in entities] == ["Camión aljibe", "Excavadora"]
        assert [e["display_order"] for e in entities] == [0, 1]

    async def test_child_entities_removed_with_parent(self, client: AsyncClient):
        res = await client.post(f"{LOOKUPS}/entity-types", json={"name": "Ubicaciones"})
        type_id = res.json()["id"]
        res = await client.post(f"{LOOKUPS}/entity-types/{type_id}/entities", json={"value": "Planta"})
        parent_id = res.json()["id"]
        await client.post(f"{LOOKUPS}/entity-types/{type_id}/entities", json={
            "value": "Sala eléctrica",
            "parent_entity_id": parent_id,
        })

        await client.delete(f"{LOOKUPS}/entities/{parent_id}")
        res = await client.get(f"{LOOKUPS}/entity-types/{type_id}/entities")
        assert res.json() == []

    async def test_reorder_entities(self, client: AsyncClient):
        res = await client.post(f"{LOOKUPS}/entity-types", json={"name": "Turnos"})
        type_id = res.json()["id"]
        ids = []
        for value in ("Día", "Noche"):
            res = await client.post(f"{LOOKUPS}/entity-types/{type_id}/entities", json={"value": value})
            ids.append(res.json()["id"])
        res = await client.put(f"{LOOKUPS}/entity-types/{type_id}/entities/reorder", json={"ids": [ids[1], ids[0]]})
        assert res.status_code == 200
        assert [e["value"] for e in res.json()] == ["Noche", "Día"]
