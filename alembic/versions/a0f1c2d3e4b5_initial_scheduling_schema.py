"""initial_scheduling_schema

Revision ID: a0f1c2d3e4b5
Revises:
Create Date: 2026-10-19 09:00:00.000000

스케줄링 스키마 초기 생성.
고객/현장, 작업자, 작업 템플릿/필드/조건, 조회 엔티티, 서비스 카탈로그,
작업 지시/일자/배정/일자 연결, 작업 인스턴스/필드 응답 테이블.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a0f1c2d3e4b5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # customers / faenas — 고객 및 현장
    op.create_table(
        'customers',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('tax_id', sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'faenas',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('customer_id', UUID(as_uuid=True), sa.ForeignKey('customers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('location', sa.String(500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_faenas_customer_id', 'faenas', ['customer_id'])

    # users — 현장 작업자 (외부 식별자 미러)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('external_id', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    # task_templates / field_templates / field_conditions — 작업 템플릿
    op.create_table(
        'task_templates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('is_repeatable', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_task_templates_category', 'task_templates', ['category'])
    op.create_table(
        'field_templates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('task_template_id', UUID(as_uuid=True), sa.ForeignKey('task_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('field_type', sa.String(20), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('default_value', sa.Text(), nullable=True),
        sa.Column('placeholder', sa.String(255), nullable=True),
        sa.Column('subheader', sa.String(255), nullable=True),
        sa.Column('display_style', sa.String(50), nullable=True),
        sa.Column('condition_logic', sa.String(3), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_field_templates_task_template_id', 'field_templates', ['task_template_id'])
    op.create_table(
        'field_conditions',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('child_field_id', UUID(as_uuid=True), sa.ForeignKey('field_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('parent_field_id', UUID(as_uuid=True), sa.ForeignKey('field_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('operator', sa.String(30), nullable=False),
        sa.Column('value', sa.JSON(), nullable=False),
        sa.Column('condition_group', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_field_conditions_child_field_id', 'field_conditions', ['child_field_id'])
    op.create_index('ix_field_conditions_parent_field_id', 'field_conditions', ['parent_field_id'])

    # lookup_entity_types / lookup_entities — 조회 엔티티
    op.create_table(
        'lookup_entity_types',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        'lookup_entities',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('entity_type_id', UUID(as_uuid=True), sa.ForeignKey('lookup_entity_types.id', ondelete='CASCADE'), nullable=False),
        sa.Column('parent_entity_id', UUID(as_uuid=True), sa.ForeignKey('lookup_entities.id', ondelete='CASCADE'), nullable=True),
        sa.Column('value', sa.String(255), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_lookup_entities_entity_type_id', 'lookup_entities', ['entity_type_id'])
    op.create_index('ix_lookup_entities_parent_entity_id', 'lookup_entities', ['parent_entity_id'])

    # services / service_task_templates / service_task_dependencies — 서비스 카탈로그
    op.create_table(
        'services',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('default_days', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('required_people', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        'service_task_templates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('service_id', UUID(as_uuid=True), sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False),
        sa.Column('task_template_id', UUID(as_uuid=True), sa.ForeignKey('task_templates.id'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('day_number', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('service_id', 'task_template_id', name='uq_service_task_template'),
    )
    op.create_index('ix_service_task_templates_service_id', 'service_task_templates', ['service_id'])
    op.create_index('ix_service_task_templates_task_template_id', 'service_task_templates', ['task_template_id'])
    op.create_table(
        'service_task_dependencies',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('service_id', UUID(as_uuid=True), sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_task_template_id', UUID(as_uuid=True), sa.ForeignKey('service_task_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('depends_on_service_task_template_id', UUID(as_uuid=True), sa.ForeignKey('service_task_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('service_task_template_id', 'depends_on_service_task_template_id', name='uq_service_task_dependency'),
    )
    op.create_index('ix_service_task_dependencies_service_id', 'service_task_dependencies', ['service_id'])
    op.create_index('ix_service_task_dependencies_service_task_template_id', 'service_task_dependencies', ['service_task_template_id'])
    op.create_index('ix_service_task_dependencies_depends_on_service_task_template_id', 'service_task_dependencies', ['depends_on_service_task_template_id'])

    # work_orders / work_order_days — 작업 지시 및 일자
    op.create_table(
        'work_orders',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('customer_id', UUID(as_uuid=True), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('faena_id', UUID(as_uuid=True), sa.ForeignKey('faenas.id'), nullable=False),
        sa.Column('service_id', UUID(as_uuid=True), sa.ForeignKey('services.id'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_work_orders_customer_id', 'work_orders', ['customer_id'])
    op.create_index('ix_work_orders_faena_id', 'work_orders', ['faena_id'])
    op.create_index('ix_work_orders_service_id', 'work_orders', ['service_id'])
    op.create_index('ix_work_orders_status', 'work_orders', ['status'])
    op.create_table(
        'work_order_days',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('work_order_id', UUID(as_uuid=True), sa.ForeignKey('work_orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_date', sa.Date(), nullable=False),
        sa.Column('day_number', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('required_people', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('work_order_id', 'day_number', name='uq_work_order_day_number'),
    )
    op.create_index('ix_work_order_days_work_order_id', 'work_order_days', ['work_order_id'])
    op.create_index('ix_work_order_days_day_date', 'work_order_days', ['day_date'])

    # 일자 배정 및 연결 — Day assignments and links
    op.create_table(
        'work_order_day_assignments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('work_order_day_id', UUID(as_uuid=True), sa.ForeignKey('work_order_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('assigned_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('assigned_by', UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        sa.UniqueConstraint('work_order_day_id', 'user_id', name='uq_work_order_day_assignment'),
    )
    op.create_index('ix_work_order_day_assignments_work_order_day_id', 'work_order_day_assignments', ['work_order_day_id'])
    op.create_index('ix_work_order_day_assignments_user_id', 'work_order_day_assignments', ['user_id'])
    op.create_table(
        'work_order_day_services',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('work_order_day_id', UUID(as_uuid=True), sa.ForeignKey('work_order_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', UUID(as_uuid=True), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('work_order_day_id', 'service_id', name='uq_work_order_day_service'),
    )
    op.create_index('ix_work_order_day_services_work_order_day_id', 'work_order_day_services', ['work_order_day_id'])
    op.create_index('ix_work_order_day_services_service_id', 'work_order_day_services', ['service_id'])
    op.create_table(
        'work_order_day_task_templates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('work_order_day_id', UUID(as_uuid=True), sa.ForeignKey('work_order_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('task_template_id', UUID(as_uuid=True), sa.ForeignKey('task_templates.id'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('work_order_day_id', 'task_template_id', name='uq_work_order_day_task_template'),
    )
    op.create_index('ix_work_order_day_task_templates_work_order_day_id', 'work_order_day_task_templates', ['work_order_day_id'])
    op.create_index('ix_work_order_day_task_templates_task_template_id', 'work_order_day_task_templates', ['task_template_id'])
    op.create_table(
        'work_order_day_task_dependencies',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('work_order_day_id', UUID(as_uuid=True), sa.ForeignKey('work_order_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('work_order_day_task_template_id', UUID(as_uuid=True), sa.ForeignKey('work_order_day_task_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('depends_on_work_order_day_task_template_id', UUID(as_uuid=True), sa.ForeignKey('work_order_day_task_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_work_order_day_task_dependencies_work_order_day_id', 'work_order_day_task_dependencies', ['work_order_day_id'])

    # task_instances / field_responses — 작업 인스턴스 및 필드 응답
    op.create_table(
        'task_instances',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('work_order_day_id', UUID(as_uuid=True), sa.ForeignKey('work_order_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('task_template_id', UUID(as_uuid=True), sa.ForeignKey('task_templates.id'), nullable=False),
        sa.Column('work_order_day_service_id', UUID(as_uuid=True), sa.ForeignKey('work_order_day_services.id'), nullable=True),
        sa.Column('service_task_template_id', UUID(as_uuid=True), sa.ForeignKey('service_task_templates.id'), nullable=True),
        sa.Column('work_order_day_task_template_id', UUID(as_uuid=True), sa.ForeignKey('work_order_day_task_templates.id'), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('instance_label', sa.String(255), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_tz', sa.String(50), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "(work_order_day_service_id IS NOT NULL AND service_task_template_id IS NOT NULL"
            " AND work_order_day_task_template_id IS NULL)"
            " OR (work_order_day_service_id IS NULL AND service_task_template_id IS NULL"
            " AND work_order_day_task_template_id IS NOT NULL)",
            name='ck_task_instance_single_origin',
        ),
        sa.UniqueConstraint('work_order_day_id', 'user_id', 'service_task_template_id', name='uq_task_instance_routine'),
        sa.UniqueConstraint('work_order_day_id', 'user_id', 'work_order_day_task_template_id', name='uq_task_instance_standalone'),
    )
    op.create_index('ix_task_instances_work_order_day_id', 'task_instances', ['work_order_day_id'])
    op.create_index('ix_task_instances_user_id', 'task_instances', ['user_id'])
    op.create_index('ix_task_instances_work_order_day_service_id', 'task_instances', ['work_order_day_service_id'])
    op.create_index('ix_task_instances_work_order_day_task_template_id', 'task_instances', ['work_order_day_task_template_id'])
    op.create_table(
        'field_responses',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('task_instance_id', UUID(as_uuid=True), sa.ForeignKey('task_instances.id', ondelete='CASCADE'), nullable=False),
        sa.Column('field_template_id', UUID(as_uuid=True), sa.ForeignKey('field_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
        sa.Column('answered_by', sa.String(255), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('task_instance_id', 'field_template_id', name='uq_field_response'),
    )
    op.create_index('ix_field_responses_task_instance_id', 'field_responses', ['task_instance_id'])


def downgrade() -> None:
    # 생성 역순으로 삭제 — Drop in reverse creation order
    for table in (
        'field_responses',
        'task_instances',
        'work_order_day_task_dependencies',
        'work_order_day_task_templates',
        'work_order_day_services',
        'work_order_day_assignments',
        'work_order_days',
        'work_orders',
        'service_task_dependencies',
        'service_task_templates',
        'services',
        'lookup_entities',
        'lookup_entity_types',
        'field_conditions',
        'field_templates',
        'task_templates',
        'users',
        'faenas',
        'customers',
    ):
        op.drop_table(table)
