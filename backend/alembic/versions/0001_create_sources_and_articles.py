"""Create sources and articles

Revision ID: 0001_sources_articles
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '0001_sources_articles'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Source type values are case-sensitive
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE sourcetype AS ENUM ('RSS', 'Webflow', 'NextJS', 'Remix');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.create_table(
        'sources',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('feed_url', sa.String(length=1000), nullable=False),
        sa.Column(
            'source_type',
            postgresql.ENUM('RSS', 'Webflow', 'NextJS', 'Remix', name='sourcetype', create_type=False),
            nullable=False,
            server_default='RSS',
        ),
        sa.Column('active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('last_crawled_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('feed_url', name='uq_sources_feed_url'),
    )
    op.create_index('idx_sources_active', 'sources', ['active'])
    op.create_index('idx_sources_source_type', 'sources', ['source_type'])

    op.create_table(
        'articles',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('source_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('url', sa.String(length=1000), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('published_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['source_id'], ['sources.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('url', name='uq_articles_url'),
    )
    op.create_index('idx_articles_source_published', 'articles', ['source_id', 'published_at'])
    op.create_index('idx_articles_published_at', 'articles', ['published_at'])


def downgrade() -> None:
    op.drop_index('idx_articles_published_at', table_name='articles')
    op.drop_index('idx_articles_source_published', table_name='articles')
    op.drop_table('articles')

    op.drop_index('idx_sources_source_type', table_name='sources')
    op.drop_index('idx_sources_active', table_name='sources')
    op.drop_table('sources')

    op.execute("DROP TYPE IF EXISTS sourcetype")
