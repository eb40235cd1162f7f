"""Initial schema: profiles, programs, assistants, share codes, access grants.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from alembic import op


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Profiles mirror identities from the identity provider; role drives authorization
    op.execute("""
        CREATE TABLE profiles (
            id UUID PRIMARY KEY,
            role TEXT NOT NULL DEFAULT 'student' CHECK (role IN ('teacher', 'student', 'admin')),
            first_name TEXT,
            avatar_url TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    # Academic tracks (utdanningsprogram)
    op.execute("""
        CREATE TABLE programs (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            code TEXT UNIQUE NOT NULL,
            name TEXT NOT NULL
        );
    """)

    op.execute("""
        CREATE TABLE profile_programs (
            profile_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            program_id UUID NOT NULL REFERENCES programs(id) ON DELETE CASCADE,
            PRIMARY KEY (profile_id, program_id)
        );
    """)

    op.execute("""
        CREATE TABLE assistants (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            teacher_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            external_agent_ref TEXT NOT NULL,
            description TEXT,
            avatar_url TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)
    op.execute("CREATE INDEX idx_assistants_teacher ON assistants(teacher_id);")

    # Standing program-based access
    op.execute("""
        CREATE TABLE assistant_programs (
            assistant_id UUID NOT NULL REFERENCES assistants(id) ON DELETE CASCADE,
            program_id UUID NOT NULL REFERENCES programs(id) ON DELETE CASCADE,
            PRIMARY KEY (assistant_id, program_id)
        );
    """)
    op.execute("CREATE INDEX idx_assistant_programs_program ON assistant_programs(program_id);")

    # Share codes are only unique among unexpired rows, enforced by the issuer.
    # Expired rows are never deleted.
    op.execute("""
        CREATE TABLE share_codes (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            code TEXT NOT NULL,
            assistant_id UUID NOT NULL REFERENCES assistants(id) ON DELETE CASCADE,
            teacher_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            expires_at TIMESTAMPTZ NOT NULL
        );
    """)
    op.execute("CREATE INDEX idx_share_codes_code_expires ON share_codes(code, expires_at);")
    op.execute("CREATE INDEX idx_share_codes_assistant ON share_codes(assistant_id);")

    # One row per (student, assistant); redemption upserts on the unique pair
    op.execute("""
        CREATE TABLE access_grants (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            student_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            assistant_id UUID NOT NULL REFERENCES assistants(id) ON DELETE CASCADE,
            expires_at TIMESTAMPTZ NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT access_grants_student_assistant_key UNIQUE (student_id, assistant_id)
        );
    """)
    op.execute("CREATE INDEX idx_access_grants_student_expires ON access_grants(student_id, expires_at);")


def downgrade():
    op.execute("DROP TABLE IF EXISTS access_grants CASCADE;")
    op.execute("DROP TABLE IF EXISTS share_codes CASCADE;")
    op.execute("DROP TABLE IF EXISTS assistant_programs CASCADE;")
    op.execute("DROP TABLE IF EXISTS assistants CASCADE;")
    op.execute("DROP TABLE IF EXISTS profile_programs CASCADE;")
    op.execute("DROP TABLE IF EXISTS programs CASCADE;")
    op.execute("DROP TABLE IF EXISTS profiles CASCADE;")
