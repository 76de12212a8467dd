"""작업 적용성 판정 테스트.

Applicability tests — routine tasks through linked services filtered by
day number, standalone tasks linked to the day, inactive links ignored.
"""

import uuid

import pytest
from httpx import AsyncClient

from app.services.applicability_service import applicability_service, applies_on_day
from app.services.day_link_service import day_link_service
from app.services.service_catalog_service import service_catalog_service
from app.utils.exceptions import NotFoundError


class TestAppliesOnDay:
    """일차 적용 규칙."""

    def test_unset_applies_everywhere(self):
        assert all(applies_on_day(None, n) for n in (1, 2, 30))

    def test_set_applies_only_on_match(self):
        assert applies_on_day(2, 2) is True
        assert applies_on_day(2, 1) is False
        assert applies_on_day(2, 3) is False


class TestApplicableTasks:
    """일자별 적용 작업 계산."""

    async def test_day_number_limits_routine_tasks(self, db, make_work_order, days_of, service, task_template):
        """day_number=2 작업은 서비스가 모든 일자에 연결되어도 2일차에만 적용."""
        await service_catalog_service.add_task_template_to_service(db, service.id, task_template.id, day_number=2)
        wo = await make_work_order()
        days = await days_of(wo)
        for day in days:
            await day_link_service.add_service_to_day(db, day.id, service.id)

        totals = []
        for day in days:
            applicable = await applicability_service.get_applicable_tasks_for_day(db, day.id)
            totals.append(len(applicable.routine_tasks))
        assert totals == [0, 1, 0]

    async def test_routine_and_standalone(self, db, make_work_order, days_of, service, make_task_template):
        routine = await make_task_template("Aislamiento eléctrico")
        standalone = await make_task_template("Reporte diario")
        service_task = await service_catalog_service.add_task_template_to_service(db, service.id, routine.id)
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        link = await day_link_service.add_service_to_day(db, day.id, service.id)
        await day_link_service.add_task_template_to_day(db, day.id, standalone.id)

        applicable = await applicability_service.get_applicable_tasks_for_day(db, day.id)
        assert len(applicable) == 2
        assert applicable.routine_tasks[0].day_service_link_id == link.id
        assert applicable.routine_tasks[0].service_task_template_id == service_task.id
        assert applicable.routine_tasks[0].display_name == "Aislamiento eléctrico"
        assert applicable.standalone_tasks[0].task_template_id == standalone.id

    async def test_inactive_links_are_ignored(self, db, make_work_order, days_of, service, make_task_template):
        routine = await make_task_template("Bloqueo")
        standalone = await make_task_template("Orden y aseo")
        await service_catalog_service.add_task_template_to_service(db, service.id, routine.id)
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        link = await day_link_service.add_service_to_day(db, day.id, service.id)
        await day_link_service.add_task_template_to_day(db, day.id, standalone.id)

        await day_link_service.remove_service_from_day(db, link.id)
        await day_link_service.remove_task_template_from_day(db, day.id, standalone.id)
        applicable = await applicability_service.get_applicable_tasks_for_day(db, day.id)
        assert len(applicable) == 0

    async def test_missing_day(self, db):
        with pytest.raises(NotFoundError):
            await applicability_service.get_applicable_tasks_for_day(db, uuid.uuid4())


class TestApplicableTasksApi:
    """적용 작업 미리보기 API."""

    async def test_preview(self, client: AsyncClient, db, make_work_order, days_of, task_template):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await day_link_service.add_task_template_to_day(db, day.id, task_template.id)

        res = await client.get(f"/api/v1/admin/work-order-days/{day.id}/applicable-tasks")
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 1
        assert data["routine_tasks"] == []
        assert data["standalone_tasks"][0]["display_name"] == "Inspección de equipos"

    async def test_preview_missing_day(self, client: AsyncClient):
        res = await client.get(f"/api/v1/admin/work-order-days/{uuid.uuid4()}/applicable-tasks")
        assert res.status_code == 404
