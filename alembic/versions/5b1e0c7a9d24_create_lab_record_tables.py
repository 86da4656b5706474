"""create users, assignments and submission tables

Revision ID: 5b1e0c7a9d24
Revises:
Create Date: 2026-10-12 10:21:07.114502

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e0c7a9d24'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('teacher', 'student', name='user_role'), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('classroom_id', sa.Integer(), nullable=True),
        sa.Column('teacher_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_assignments_id', 'assignments', ['id'])
    op.create_index('ix_assignments_classroom_id', 'assignments', ['classroom_id'])

    # Submissions are append-only; the newest row per (assignment, student) is current
    for table, columns in (
        ('algorithm_submissions', [
            sa.Column('content', sa.Text(), nullable=False),
        ]),
        ('code_submissions', [
            sa.Column('code', sa.Text(), nullable=False),
            sa.Column('language', sa.String(), nullable=False),
            sa.Column('output', sa.Text(), nullable=True),
        ]),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('assignment_id', sa.Integer(), sa.ForeignKey('assignments.id'), nullable=False),
            sa.Column('student_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
            *columns,
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('feedback', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
        )
        for column in ('id', 'assignment_id', 'student_id', 'created_at'):
            op.create_index(f'ix_{table}_{column}', table, [column])


def downgrade() -> None:
    op.drop_table('code_submissions')
    op.drop_table('algorithm_submissions')
    op.drop_table('assignments')
    op.drop_table('users')
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
