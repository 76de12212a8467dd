"""작업 인스턴스 생성 테스트.

Task instance materialization tests — idempotent fan-out on assignment,
on linking services and task templates to a day, and on adding routine
tasks to a service; label snapshots and reactivation without duplicates.
"""

import uuid
from datetime import date

import pytest
from sqlalchemy import func, select

from app.models.task_instance import RoutineOrigin, StandaloneOrigin, TaskInstance
from app.models.service import ServiceTaskTemplate
from app.repositories.task_instance_repository import task_instance_repository
from app.services.assignment_service import assignment_service
from app.services.day_link_service import day_link_service
from app.services.service_catalog_service import service_catalog_service
from app.services.task_instance_materializer import task_instance_materializer
from app.services.task_template_service import task_template_service
from app.utils.exceptions import NotFoundError


async def _instance_count(db) -> int:
    return (await db.execute(select(func.count()).select_from(TaskInstance))).scalar_one()


class TestAssignedUserMaterialization:
    """작업자 배정 시 인스턴스 생성 테스트."""

    async def test_routine_link_single_instance(self, db, make_work_order, days_of, service, task_template, worker):
        """루틴 연결 + 배정 → 인스턴스 정확히 1개, 재배정해도 1개."""
        await service_catalog_service.add_task_template_to_service(db, service.id, task_template.id)
        wo = await make_work_order()
        day1 = (await days_of(wo))[0]
        link = await day_link_service.add_service_to_day(db, day1.id, service.id)

        await assignment_service.assign_user(db, day1.id, worker.id)
        instances = await task_instance_repository.get_by_day(db, day1.id, worker.external_id)
        assert len(instances) == 1
        assert instances[0].origin == RoutineOrigin(link.id, instances[0].service_task_template_id)
        assert instances[0].status == "draft"

        # 재시도 — idempotent retry
        await assignment_service.assign_user(db, day1.id, worker.id)
        assert len(await task_instance_repository.get_by_day(db, day1.id, worker.external_id)) == 1

    async def test_seeded_work_order_gives_standalone_instance(
        self, db, make_work_order, days_of, service, task_template, worker
    ):
        """서비스로 생성된 작업 지시는 일자 작업 템플릿 출처로 생성."""
        await service_catalog_service.add_task_template_to_service(db, service.id, task_template.id)
        wo = await make_work_order(service_id=service.id)
        day1 = (await days_of(wo))[0]

        await assignment_service.assign_user(db, day1.id, worker.id)
        instances = await task_instance_repository.get_by_day(db, day1.id)
        assert len(instances) == 1
        assert isinstance(instances[0].origin, StandaloneOrigin)
        assert await _instance_count(db) == 1

    async def test_materialize_twice_is_idempotent(self, db, make_work_order, days_of, make_task_template, worker):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        for name in ("Checklist", "Permiso de trabajo"):
            template = await make_task_template(name)
            await day_link_service.add_task_template_to_day(db, day.id, template.id)
        await assignment_service.assign_user(db, day.id, worker.id)

        first = await task_instance_repository.get_by_day(db, day.id)
        created = await task_instance_materializer.materialize_for_assigned_user(db, day.id, worker.external_id)
        second = await task_instance_repository.get_by_day(db, day.id)
        assert created == []
        assert {i.id for i in first} == {i.id for i in second}
        assert len(second) == 2

    async def test_unknown_identity_is_skipped(self, db, make_work_order, days_of, task_template):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await day_link_service.add_task_template_to_day(db, day.id, task_template.id)
        created = await task_instance_materializer.materialize_for_assigned_user(db, day.id, "nobody")
        assert created == []
        assert await _instance_count(db) == 0

    async def test_bulk_assign_fans_out(self, db, make_work_order, days_of, task_template, make_user):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await day_link_service.add_task_template_to_day(db, day.id, task_template.id)
        users = [await make_user(f"u-{n}") for n in range(3)]

        assignments = await assignment_service.bulk_assign(db, day.id, [u.id for u in users])
        assert len(assignments) == 3
        instances = await task_instance_repository.get_by_day(db, day.id)
        assert sorted(i.user_id for i in instances) == ["u-0", "u-1", "u-2"]

    async def test_unassign_keeps_instances(self, db, make_work_order, days_of, task_template, worker):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await day_link_service.add_task_template_to_day(db, day.id, task_template.id)
        await assignment_service.assign_user(db, day.id, worker.id)

        await assignment_service.unassign_user(db, day.id, worker.id)
        assert await assignment_service.list_assignments(db, day.id) == []
        assert await _instance_count(db) == 1

    async def test_replace_assignments(self, db, make_work_order, days_of, make_user):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        a, b, c = [await make_user(x) for x in ("a", "b", "c")]
        await assignment_service.bulk_assign(db, day.id, [a.id, b.id])

        await assignment_service.replace_assignments(db, day.id, [b.id, c.id])
        assigned = {x.user_id for x in await assignment_service.list_assignments(db, day.id)}
        assert assigned == {b.id, c.id}

    async def test_replace_with_unknown_user_keeps_assignments(self, db, make_work_order, days_of, make_user):
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        a, b = [await make_user(x) for x in ("a", "b")]
        await assignment_service.bulk_assign(db, day.id, [a.id, b.id])

        with pytest.raises(NotFoundError):
            await assignment_service.replace_assignments(db, day.id, [b.id, uuid.uuid4()])
        assigned = {x.user_id for x in await assignment_service.list_assignments(db, day.id)}
        assert assigned == {a.id, b.id}


class TestLinkMaterialization:
    """연결 추가 시 이미 배정된 작업자에 대한 생성 테스트."""

    async def test_standalone_link_after_assignment(self, db, make_work_order, days_of, task_template, make_user):
        wo = await make_work_order()
        day = (await days_of(wo))[1]
        for identity in ("u-1", "u-2"):
            user = await make_user(identity)
            await assignment_service.assign_user(db, day.id, user.id)
        assert await _instance_count(db) == 0

        await day_link_service.add_task_template_to_day(db, day.id, task_template.id)
        assert await _instance_count(db) == 2

    async def test_new_routine_task_backfills_linked_days(
        self, db, make_work_order, days_of, service, make_task_template, worker
    ):
        """서비스에 작업 추가 → 연결된 일자의 배정 작업자에게 생성 (day_number 적용)."""
        wo = await make_work_order()
        days = await days_of(wo)
        for day in days:
            await day_link_service.add_service_to_day(db, day.id, service.id)
            await assignment_service.assign_user(db, day.id, worker.id)

        every_day = await make_task_template("Charla de seguridad")
        only_day3 = await make_task_template("Entrega de área")
        await service_catalog_service.add_task_template_to_service(db, service.id, every_day.id)
        await service_catalog_service.add_task_template_to_service(db, service.id, only_day3.id, day_number=3)

        per_day = [len(await task_instance_repository.get_by_day(db, d.id)) for d in days]
        assert per_day == [1, 1, 2]

    async def test_reactivated_link_does_not_duplicate(
        self, db, make_work_order, days_of, service, task_template, worker
    ):
        await service_catalog_service.add_task_template_to_service(db, service.id, task_template.id)
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        link = await day_link_service.add_service_to_day(db, day.id, service.id)
        await assignment_service.assign_user(db, day.id, worker.id)

        await day_link_service.remove_service_from_day(db, link.id)
        again = await day_link_service.add_service_to_day(db, day.id, service.id)
        assert again.id == link.id
        assert again.is_active is True
        assert await _instance_count(db) == 1

    async def test_inactive_service_task_not_materialized(
        self, db, make_work_order, days_of, service, task_template, worker
    ):
        service_task: ServiceTaskTemplate = await service_catalog_service.add_task_template_to_service(
            db, service.id, task_template.id
        )
        await service_catalog_service.remove_task_template_from_service(db, service_task.id)
        wo = await make_work_order()
        day = (await days_of(wo))[0]
        await day_link_service.add_service_to_day(db, day.id, service.id)
        await assignment_service.assign_user(db, day.id, worker.id)
        assert await _instance_count(db) == 0


class TestInstanceLabel:
    """인스턴스 라벨 스냅샷 테스트."""

    async def test_label_survives_template_rename(self, db, make_work_order, days_of, task_template, worker):
        wo = await make_work_order(start_date=date(2024, 7, 1), end_date=date(2024, 7, 1))
        day = (await days_of(wo))[0]
        await day_link_service.add_task_template_to_day(db, day.id, task_template.id)
        await assignment_service.assign_user(db, day.id, worker.id)

        await task_template_service.update_task_template(db, task_template.id, {"name": "Nuevo nombre"})
        instances = await task_instance_repository.get_by_day(db, day.id)
        assert instances[0].instance_label == "Inspección de equipos"
