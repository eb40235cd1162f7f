"""Row level security for teacher-owned tables.

user_conn() sets app.user_id to the teacher; system_conn() sets it to ''.
get_app_user_id() maps '' to NULL so system connections bypass the
owner check.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade():
    op.execute("""
        CREATE OR REPLACE FUNCTION get_app_user_id() RETURNS uuid AS $$
        DECLARE
            val text;
        BEGIN
            val := current_setting('app.user_id', true);
            IF val IS NULL OR val = '' THEN
                RETURN NULL;
            END IF;
            RETURN val::uuid;
        END;
        $$ LANGUAGE plpgsql STABLE;
    """)

    for table in ("assistants", "share_codes"):
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")
        op.execute(f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY;")
        op.execute(f"""
            CREATE POLICY {table}_all_own
            ON {table}
            FOR ALL
            USING (get_app_user_id() IS NULL OR teacher_id = get_app_user_id())
            WITH CHECK (get_app_user_id() IS NULL OR teacher_id = get_app_user_id());
        """)

    # Program links follow the owning assistant
    op.execute("ALTER TABLE assistant_programs ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE assistant_programs FORCE ROW LEVEL SECURITY;")
    op.execute("""
        CREATE POLICY assistant_programs_all_own
        ON assistant_programs
        FOR ALL
        USING (
            get_app_user_id() IS NULL
            OR assistant_id IN (SELECT id FROM assistants WHERE teacher_id = get_app_user_id())
        )
        WITH CHECK (
            get_app_user_id() IS NULL
            OR assistant_id IN (SELECT id FROM assistants WHERE teacher_id = get_app_user_id())
        );
    """)


def downgrade():
    op.execute("DROP POLICY IF EXISTS assistant_programs_all_own ON assistant_programs;")
    op.execute("ALTER TABLE assistant_programs DISABLE ROW LEVEL SECURITY;")
    for table in ("assistants", "share_codes"):
        op.execute(f"DROP POLICY IF EXISTS {table}_all_own ON {table};")
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")
    op.execute("DROP FUNCTION IF EXISTS get_app_user_id();")
