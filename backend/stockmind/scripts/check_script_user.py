"""
Diagnostic report: which user owns each library script.

Runs two read-only joins and prints them as plain tables:

1. scripts with their owning user
2. scripts linked to a project, with the project's owner, flagging scripts
   whose owner differs from the project owner

Usage:
    python -m stockmind.scripts.check_script_user [--database-url URL] [--script-id ID]
"""
import argparse
import sys
from typing import List, Optional, Sequence, TextIO

from sqlalchemy import text
from sqlalchemy.engine import Engine

from stockmind.utils.serialization import serialize_row

SCRIPT_OWNERS_SQL = """
SELECT s.id AS script_id,
       s.title AS title,
       s.status AS status,
       s.user_id AS user_id,
       u.email AS email,
       s.created_at AS created_at
FROM scripts_library s
LEFT JOIN users u ON u.id = s.user_id
{where}
ORDER BY s.created_at DESC
"""

PROJECT_LINKS_SQL = """
SELECT s.id AS script_id,
       s.project_id AS project_id,
       s.user_id AS script_user_id,
       p.user_id AS project_user_id,
       p.status AS project_status
FROM scripts_library s
JOIN projects p ON p.id = s.project_id
{where}
ORDER BY s.created_at DESC
"""

OWNER_COLUMNS = ["script_id", "title", "status", "user_id", "email", "created_at"]
LINK_COLUMNS = ["script_id", "project_id", "script_user_id", "project_user_id", "project_status", "owner_match"]


def format_table(columns: Sequence[str], rows: List[dict]) -> str:
    """Render rows as a fixed-width text table."""
    cells = [[("" if row.get(c) is None else str(row.get(c))) for c in columns] for row in rows]
    widths = [max([len(c)] + [len(r[i]) for r in cells]) for i, c in enumerate(columns)]

    def line(values: Sequence[str]) -> str:
        return " | ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    out = [line(columns), "-+-".join("-" * w for w in widths)]
    out.extend(line(r) for r in cells)
    if not rows:
        out.append("(no rows)")
    return "\n".join(out)


def _filtered(sql: str, script_id: Optional[str]):
    if script_id:
        return text(sql.format(where="WHERE s.id = :script_id")), {"script_id": script_id}
    return text(sql.format(where="")), {}


def fetch_script_owners(engine: Engine, script_id: Optional[str] = None) -> List[dict]:
    statement, params = _filtered(SCRIPT_OWNERS_SQL, script_id)
    with engine.connect() as conn:
        result = conn.execute(statement, params)
        return [serialize_row(row, OWNER_COLUMNS) for row in result]


def fetch_project_links(engine: Engine, script_id: Optional[str] = None) -> List[dict]:
    statement, params = _filtered(PROJECT_LINKS_SQL, script_id)
    with engine.connect() as conn:
        result = conn.execute(statement, params)
        rows = [serialize_row(row, LINK_COLUMNS[:-1]) for row in result]
    for row in rows:
        row["owner_match"] = "yes" if row["script_user_id"] == row["project_user_id"] else "NO"
    return rows


def report(engine: Engine, script_id: Optional[str] = None, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    owners = fetch_script_owners(engine, script_id)
    links = fetch_project_links(engine, script_id)

    print("Scripts and their owners", file=out)
    print(format_table(OWNER_COLUMNS, owners), file=out)
    print("", file=out)
    print("Scripts linked to projects", file=out)
    print(format_table(LINK_COLUMNS, links), file=out)

    mismatches = sum(1 for row in links if row["owner_match"] == "NO")
    print("", file=out)
    print(f"{len(owners)} scripts, {len(links)} project links, {mismatches} owner mismatches", file=out)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show which user owns each library script.")
    parser.add_argument("--database-url", help="Database URL (defaults to DATABASE_URL setting)")
    parser.add_argument("--script-id", help="Only report this script")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, engine: Optional[Engine] = None) -> int:
    args = parse_args(argv)

    if engine is not None:
        report(engine, args.script_id)
        return 0

    if not args.database_url:
        from stockmind.database import engine as app_engine
        report(app_engine, args.script_id)
        return 0

    from stockmind.database import build_engine
    own_engine = build_engine(args.database_url, environment="script")
    try:
        report(own_engine, args.script_id)
    finally:
        own_engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
