"""initial schema

Revision ID: 5b1f0c2d9e7a
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '5b1f0c2d9e7a'
down_revision = None
branch_labels = None
depends_on = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('reset_token', sa.String(length=255), nullable=True),
        sa.Column('reset_token_expires', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('admin','trainer','nutritionist','member')", name='ck_users_role'),
        sa.CheckConstraint("status IN ('pending','active','suspended')", name='ck_users_status'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_users_email'), ['email'], unique=True)
        batch_op.create_index(batch_op.f('ix_users_role'), ['role'], unique=False)

    op.create_table('food_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein', sa.Float(), nullable=True),
        sa.Column('carbs', sa.Float(), nullable=True),
        sa.Column('fat', sa.Float(), nullable=True),
        sa.Column('is_local', sa.Boolean(), nullable=True),
        sa.Column('source_api', sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('exercises',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('calories_per_min', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('exercises', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_exercises_name'), ['name'], unique=False)

    op.create_table('system_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('log_type', sa.String(length=20), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('system_logs', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_system_logs_log_type'), ['log_type'], unique=False)
        batch_op.create_index(batch_op.f('ix_system_logs_created_at'), ['created_at'], unique=False)

    op.create_table('member_profiles',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('gender', sa.String(length=10), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('height_cm', sa.Float(), nullable=True),
        sa.Column('goal', sa.String(length=100), nullable=True),
        sa.Column('activity_level', sa.String(length=30), nullable=True),
        sa.Column('trainer_intake', JSONType, nullable=True),
        sa.Column('nutrition_intake', JSONType, nullable=True),
        sa.Column('is_private', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('bmr', sa.Float(), nullable=True),
        sa.Column('tdee', sa.Float(), nullable=True),
        sa.Column('target_calories', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id')
    )

    op.create_table('member_goals',
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('weekly_calorie_goal', sa.Float(), nullable=True),
        sa.Column('weekly_workout_minutes', sa.Float(), nullable=True),
        sa.Column('daily_steps_goal', sa.Integer(), nullable=True),
        sa.Column('daily_water_liters', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('member_id')
    )

    op.create_table('trainer_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('trainer_id', sa.Integer(), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['trainer_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('member_id')
    )
    with op.batch_alter_table('trainer_assignments', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_trainer_assignments_trainer_id'), ['trainer_id'], unique=False)

    op.create_table('nutritionist_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('nutritionist_id', sa.Integer(), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['nutritionist_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('member_id')
    )
    with op.batch_alter_table('nutritionist_assignments', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_nutritionist_assignments_nutritionist_id'), ['nutritionist_id'], unique=False)

    op.create_table('diet_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('nutritionist_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('goal', sa.String(length=100), nullable=True),
        sa.Column('daily_calories', sa.Float(), nullable=True),
        sa.Column('daily_protein', sa.Float(), nullable=True),
        sa.Column('daily_carbs', sa.Float(), nullable=True),
        sa.Column('daily_fat', sa.Float(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['nutritionist_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('diet_plans', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_diet_plans_member_id'), ['member_id'], unique=False)
        batch_op.create_index('idx_diet_plans_member_active', ['member_id', 'is_active'], unique=False)

    op.create_table('diet_plan_meals',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('diet_plan_id', sa.Integer(), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['diet_plan_id'], ['diet_plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('diet_plan_meals', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_diet_plan_meals_diet_plan_id'), ['diet_plan_id'], unique=False)

    op.create_table('diet_plan_meal_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('diet_plan_meal_id', sa.Integer(), nullable=False),
        sa.Column('food_item_id', sa.Integer(), nullable=True),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein', sa.Float(), nullable=True),
        sa.Column('carbs', sa.Float(), nullable=True),
        sa.Column('fat', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['diet_plan_meal_id'], ['diet_plan_meals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['food_item_id'], ['food_items.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('diet_plan_meal_items', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_diet_plan_meal_items_diet_plan_meal_id'), ['diet_plan_meal_id'], unique=False)

    op.create_table('workout_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('trainer_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('goal', sa.String(length=100), nullable=True),
        sa.Column('weekly_days', sa.Integer(), nullable=True),
        sa.Column('estimated_duration', sa.Integer(), nullable=True),
        sa.Column('difficulty', sa.String(length=30), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['trainer_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('workout_plans', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_workout_plans_member_id'), ['member_id'], unique=False)
        batch_op.create_index('idx_workout_plans_member_active', ['member_id', 'is_active'], unique=False)

    op.create_table('workout_plan_days',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_plan_id', sa.Integer(), nullable=False),
        sa.Column('day_of_week', sa.String(length=20), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('difficulty', sa.String(length=30), nullable=True),
        sa.Column('focus', sa.String(length=255), nullable=True),
        sa.Column('tips', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['workout_plan_id'], ['workout_plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('workout_plan_days', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_workout_plan_days_workout_plan_id'), ['workout_plan_id'], unique=False)

    op.create_table('workout_plan_exercises',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_plan_day_id', sa.Integer(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=True),
        sa.Column('reps', sa.String(length=50), nullable=True),
        sa.Column('rest', sa.String(length=50), nullable=True),
        sa.Column('duration_minutes', sa.Float(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('target_muscles', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['workout_plan_day_id'], ['workout_plan_days.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('workout_plan_exercises', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_workout_plan_exercises_workout_plan_day_id'), ['workout_plan_day_id'], unique=False)

    op.create_table('meal_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('meal_logs', schema=None) as batch_op:
        batch_op.create_index('idx_meal_logs_member_logged', ['member_id', 'logged_at'], unique=False)

    op.create_table('meal_log_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('meal_log_id', sa.Integer(), nullable=False),
        sa.Column('food_item_id', sa.Integer(), nullable=True),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein', sa.Float(), nullable=True),
        sa.Column('carbs', sa.Float(), nullable=True),
        sa.Column('fat', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['meal_log_id'], ['meal_logs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['food_item_id'], ['food_items.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('meal_log_items', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_meal_log_items_meal_log_id'), ['meal_log_id'], unique=False)

    op.create_table('workout_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('workout_logs', schema=None) as batch_op:
        batch_op.create_index('idx_workout_logs_member_logged', ['member_id', 'logged_at'], unique=False)

    op.create_table('workout_log_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_log_id', sa.Integer(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=True),
        sa.Column('duration_minutes', sa.Float(), nullable=False),
        sa.Column('calories_burned', sa.Float(), nullable=True),
        sa.Column('weight_used', sa.Float(), nullable=True),
        sa.Column('weight_unit', sa.String(length=10), nullable=True),
        sa.ForeignKeyConstraint(['workout_log_id'], ['workout_logs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('workout_log_items', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_workout_log_items_workout_log_id'), ['workout_log_id'], unique=False)

    op.create_table('weight_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('weight_kg', sa.Float(), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('weight_logs', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_weight_logs_member_id'), ['member_id'], unique=False)

    op.create_table('member_check_ins',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('adherence', sa.Float(), nullable=True),
        sa.Column('fatigue', sa.Float(), nullable=True),
        sa.Column('pain', sa.Float(), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('member_check_ins', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_member_check_ins_member_id'), ['member_id'], unique=False)

    op.create_table('member_plan_messages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=True),
        sa.Column('sender_role', sa.String(length=20), nullable=False),
        sa.Column('plan_type', sa.String(length=10), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("plan_type IN ('diet','workout')", name='ck_plan_messages_type'),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['coach_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('member_plan_messages', schema=None) as batch_op:
        batch_op.create_index('idx_plan_messages_member_type', ['member_id', 'plan_type'], unique=False)

    op.create_table('notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('notifications', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_notifications_user_id'), ['user_id'], unique=False)

    op.create_table('trainer_feedback',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trainer_id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['trainer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('trainer_feedback', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_trainer_feedback_member_id'), ['member_id'], unique=False)

    op.create_table('nutritionist_feedback',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nutritionist_id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['nutritionist_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('nutritionist_feedback', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_nutritionist_feedback_member_id'), ['member_id'], unique=False)

    op.create_table('schedules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trainer_id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('session_type', sa.String(length=20), nullable=False),
        sa.Column('session_date', sa.Date(), nullable=False),
        sa.Column('session_time', sa.Time(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='scheduled'),
        sa.CheckConstraint("session_type IN ('personal','online','group')", name='ck_schedules_type'),
        sa.ForeignKeyConstraint(['trainer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('schedules', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_schedules_trainer_id'), ['trainer_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_schedules_member_id'), ['member_id'], unique=False)


def downgrade():
    for table in (
        'schedules', 'nutritionist_feedback', 'trainer_feedback', 'notifications',
        'member_plan_messages', 'member_check_ins', 'weight_logs',
        'workout_log_items', 'workout_logs', 'meal_log_items', 'meal_logs',
        'workout_plan_exercises', 'workout_plan_days', 'workout_plans',
        'diet_plan_meal_items', 'diet_plan_meals', 'diet_plans',
        'nutritionist_assignments', 'trainer_assignments', 'member_goals',
        'member_profiles', 'system_logs', 'exercises', 'food_items', 'users',
    ):
        op.drop_table(table)
