#!/usr/bin/env python3
"""
Seed the programs table with the upper secondary education programs.

Usage:
    python scripts/seed_programs.py [profile_id program_code ...]

Without arguments, only the programs are upserted. With a profile id and
one or more program codes, that profile is also enrolled in those programs.
"""

import asyncio
import sys
from uuid import UUID

from hallaien.db import close_pool, init_pool, system_conn

PROGRAMS = [
    ("ST", "Studiespesialisering"),
    ("ID", "Idrettsfag"),
    ("MDD", "Musikk, dans og drama"),
    ("KDA", "Kunst, design og arkitektur"),
    ("MK", "Medier og kommunikasjon"),
    ("BA", "Bygg- og anleggsteknikk"),
    ("EL", "Elektro og datateknologi"),
    ("HO", "Helse- og oppvekstfag"),
    ("IM", "Informasjonsteknologi og medieproduksjon"),
    ("NA", "Naturbruk"),
    ("RM", "Restaurant- og matfag"),
    ("SR", "Salg, service og reiseliv"),
    ("TIF", "Teknologi- og industrifag"),
    ("HDP", "Håndverk, design og produktutvikling"),
    ("FBIE", "Frisør, blomster, interiør og eksponeringsdesign"),
]


async def upsert_programs() -> int:
    """Insert missing programs and refresh names of existing ones."""
    async with system_conn() as conn:
        await conn.executemany(
            """
            INSERT INTO programs (code, name)
            VALUES ($1, $2)
            ON CONFLICT (code) DO UPDATE SET name = EXCLUDED.name
            """,
            PROGRAMS,
        )
    return len(PROGRAMS)


async def enroll(profile_id: UUID, codes: list[str]) -> int:
    """Add a profile to programs by code. Unknown codes are ignored."""
    async with system_conn() as conn:
        result = await conn.execute(
            """
            INSERT INTO profile_programs (profile_id, program_id)
            SELECT $1, p.id FROM programs p WHERE p.code = ANY($2::text[])
            ON CONFLICT DO NOTHING
            """,
            profile_id,
            [c.upper() for c in codes],
        )
    return int(result.split()[2])


async def main():
    await init_pool()

    try:
        count = await upsert_programs()
        print(f"Upserted {count} programs")

        if len(sys.argv) >= 3:
            profile_id = UUID(sys.argv[1])
            added = await enroll(profile_id, sys.argv[2:])
            print(f"Enrolled {profile_id} in {added} new program(s)")
    finally:
        await close_pool()


if __name__ == "__main__":
    asyncio.run(main())
