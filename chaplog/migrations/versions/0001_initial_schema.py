"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-01-10 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(256), nullable=False),
        sa.Column('normalized_email', sa.String(256), nullable=False),
        sa.Column('username', sa.String(256), nullable=False),
        sa.Column('normalized_username', sa.String(256), nullable=False),
        sa.Column('password_hash', sa.String(256), nullable=False),
        sa.Column('security_stamp', sa.String(256), nullable=True),
        sa.Column('concurrency_stamp', sa.String(256), nullable=True),
        sa.Column('email_confirmed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('lockout_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('lockout_end', sa.DateTime(), nullable=True),
        sa.Column('access_failed_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('role', sa.String(50), nullable=False, server_default='User'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('User', 'Admin')", name='ck_users_role'),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('normalized_email', name='uq_users_normalized_email'),
    )
    op.create_index('ix_users_normalized_username', 'users', ['normalized_username'])

    op.create_table(
        'books',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('author', sa.String(500), nullable=False),
        sa.Column('publisher', sa.String(256), nullable=True),
        sa.Column('publication_year', sa.Integer(), nullable=True),
        sa.Column('total_pages', sa.Integer(), nullable=True),
        sa.Column('genre', sa.String(100), nullable=True),
        sa.Column('cover_image_url', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='unread'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('current_page', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('started_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint("status IN ('unread', 'reading', 'completed')", name='ck_books_status'),
        sa.CheckConstraint('current_page >= 0', name='ck_books_current_page'),
        sa.CheckConstraint('total_pages IS NULL OR total_pages > 0', name='ck_books_total_pages'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_books_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_books'),
    )
    op.create_index('ix_books_user_id', 'books', ['user_id'])
    op.create_index('ix_books_status', 'books', ['status'])
    op.create_index('ix_books_created_at', 'books', ['created_at'])
    op.create_index('ix_books_user_status', 'books', ['user_id', 'status'])
    op.create_index('ix_books_title_author', 'books', ['title', 'author'])

    op.create_table(
        'reading_entries',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('book_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('reading_date', sa.Date(), nullable=False),
        sa.Column('start_page', sa.Integer(), nullable=False),
        sa.Column('end_page', sa.Integer(), nullable=False),
        sa.Column('chapter', sa.String(256), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('impression', sa.Text(), nullable=True),
        sa.Column('learnings', sa.JSON(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reading_entries_rating'),
        sa.CheckConstraint('start_page <= end_page AND start_page > 0', name='ck_reading_entries_pages'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], name='fk_reading_entries_book_id_books', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_reading_entries_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_reading_entries'),
    )
    op.create_index('ix_reading_entries_book_id', 'reading_entries', ['book_id'])
    op.create_index('ix_reading_entries_user_id', 'reading_entries', ['user_id'])
    op.create_index('ix_reading_entries_reading_date', 'reading_entries', ['reading_date'])
    op.create_index('ix_reading_entries_book_date', 'reading_entries', ['book_id', 'reading_date'])

    op.create_table(
        'book_reviews',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('book_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('completed_date', sa.Date(), nullable=False),
        sa.Column('overall_impression', sa.Text(), nullable=False),
        sa.Column('key_learnings', sa.JSON(), nullable=False),
        sa.Column('overall_rating', sa.Integer(), nullable=False),
        sa.Column('recommendation_level', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint('overall_rating BETWEEN 1 AND 5', name='ck_book_reviews_overall_rating'),
        sa.CheckConstraint('recommendation_level BETWEEN 1 AND 5', name='ck_book_reviews_recommendation_level'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], name='fk_book_reviews_book_id_books', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_book_reviews_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_book_reviews'),
        sa.UniqueConstraint('book_id', name='uq_book_reviews_book_id'),
    )
    op.create_index('ix_book_reviews_user_id', 'book_reviews', ['user_id'])

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('token', sa.String(256), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('created_by_ip', sa.String(45), nullable=True),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.Column('revoked_by_ip', sa.String(45), nullable=True),
        sa.Column('replaced_by_token', sa.String(256), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_refresh_tokens_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_refresh_tokens'),
        sa.UniqueConstraint('token', name='uq_refresh_tokens_token'),
    )
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])
    op.create_index('ix_refresh_tokens_expires_at', 'refresh_tokens', ['expires_at'])


def downgrade():
    # Children first so foreign keys never dangle
    op.drop_table('refresh_tokens')
    op.drop_table('book_reviews')
    op.drop_table('reading_entries')
    op.drop_table('books')
    op.drop_table('users')
