"""Initial catalog schema

Revision ID: 001
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Auth identities
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Profiles share their id with the user
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('full_name', sa.String(200), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('instagram_url', sa.String(500), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_profiles_full_name', 'profiles', ['full_name'])

    # Plants
    op.create_table(
        'plants',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('nama_indonesia', sa.String(200), nullable=False),
        sa.Column('nama_latin', sa.String(200), nullable=True),
        sa.Column('kingdom', sa.String(100), nullable=True, server_default='Plantae'),
        sa.Column('divisi', sa.String(100), nullable=True),
        sa.Column('class', sa.String(100), nullable=True),
        sa.Column('ordo', sa.String(100), nullable=True),
        sa.Column('famili', sa.String(100), nullable=True),
        sa.Column('genus', sa.String(100), nullable=True),
        sa.Column('spesies', sa.String(200), nullable=True),
        sa.Column('habitat', sa.Text(), nullable=True),
        sa.Column('ciri_khas', sa.Text(), nullable=True),
        sa.Column('manfaat', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('taxonomy_descriptions', sa.JSON(), nullable=True),
        sa.Column('youtube_url', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['created_by'], ['profiles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_plants_nama_indonesia', 'plants', ['nama_indonesia'])
    op.create_index('ix_plants_famili', 'plants', ['famili'])
    op.create_index('ix_plants_created_by', 'plants', ['created_by'])
    op.create_index('ix_plants_created_at', 'plants', ['created_at'])

    # Collaborator links (one per plant + user)
    op.create_table(
        'plant_collaborators',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('plant_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('added_by', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['added_by'], ['profiles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('plant_id', 'user_id', name='uq_plant_collaborators_plant_user')
    )
    op.create_index('ix_plant_collaborators_plant_id', 'plant_collaborators', ['plant_id'])
    op.create_index('ix_plant_collaborators_user_id', 'plant_collaborators', ['user_id'])

    # Append-only activity log
    op.create_table(
        'plant_activity_logs',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('plant_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=True),
        sa.Column('action_type', sa.String(50), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_plant_activity_logs_plant_id', 'plant_activity_logs', ['plant_id'])
    op.create_index('ix_plant_activity_logs_created_at', 'plant_activity_logs', ['created_at'])


def downgrade() -> None:
    op.drop_table('plant_activity_logs')
    op.drop_table('plant_collaborators')
    op.drop_table('plants')
    op.drop_table('profiles')
    op.drop_table('users')
