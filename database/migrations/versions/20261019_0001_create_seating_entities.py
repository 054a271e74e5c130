"""create seating entities

Revision ID: 20261019_0001
Revises: None
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


course_type_enum = sa.Enum("open", "common", "supplementary", name="course_type")
time_code_enum = sa.Enum("FN", "AN", name="time_code")


def upgrade() -> None:
    op.create_table(
        "programs",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("type", course_type_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "course_programs",
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("program_id", sa.String(length=36), sa.ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "exam_slots",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time_code", time_code_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("date", "time_code", name="uq_exam_slots_date_time_code"),
    )
    op.create_index("ix_exam_slots_date", "exam_slots", ["date"])

    op.create_table(
        "exams",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("slot_id", sa.String(length=36), sa.ForeignKey("exam_slots.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_exams_course_id", "exams", ["course_id"])
    op.create_index("ix_exams_slot_id", "exams", ["slot_id"])

    op.create_table(
        "students",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("roll_number", sa.String(length=50), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("program_id", sa.String(length=36), sa.ForeignKey("programs.id", ondelete="RESTRICT"), nullable=False),
        sa.Column(
            "open_course_id",
            sa.String(length=36),
            sa.ForeignKey("courses.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_students_roll_number", "students", ["roll_number"], unique=True)
    op.create_index("ix_students_program_id", "students", ["program_id"])
    op.create_index("ix_students_open_course_id", "students", ["open_course_id"])

    op.create_table(
        "supplementaries",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("student_id", sa.String(length=36), sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.Column("exam_id", sa.String(length=36), sa.ForeignKey("exams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("student_id", "exam_id", name="uq_supplementaries_student_exam"),
    )
    op.create_index("ix_supplementaries_student_id", "supplementaries", ["student_id"])
    op.create_index("ix_supplementaries_exam_id", "supplementaries", ["exam_id"])

    op.create_table(
        "blocks",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_blocks_name", "blocks", ["name"], unique=True)

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("floor", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("block_id", sa.String(length=36), sa.ForeignKey("blocks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rows", sa.Integer(), nullable=False),
        sa.Column("cols", sa.Integer(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_rooms_block_id", "rooms", ["block_id"])


def downgrade() -> None:
    op.drop_index("ix_rooms_block_id", table_name="rooms")
    op.drop_table("rooms")
    op.drop_index("ix_blocks_name", table_name="blocks")
    op.drop_table("blocks")
    op.drop_index("ix_supplementaries_exam_id", table_name="supplementaries")
    op.drop_index("ix_supplementaries_student_id", table_name="supplementaries")
    op.drop_table("supplementaries")
    op.drop_index("ix_students_open_course_id", table_name="students")
    op.drop_index("ix_students_program_id", table_name="students")
    op.drop_index("ix_students_roll_number", table_name="students")
    op.drop_table("students")
    op.drop_index("ix_exams_slot_id", table_name="exams")
    op.drop_index("ix_exams_course_id", table_name="exams")
    op.drop_table("exams")
    op.drop_index("ix_exam_slots_date", table_name="exam_slots")
    op.drop_table("exam_slots")
    op.drop_table("course_programs")
    op.drop_table("courses")
    op.drop_table("programs")
    time_code_enum.drop(op.get_bind(), checkfirst=True)
    course_type_enum.drop(op.get_bind(), checkfirst=True)
