"""
Synthetic data generation and loading script for Badge Forge.

Generates deterministic pseudo-random users and recipes as CSV files and loads
them into Postgres with COPY. Handy for exercising the processor against a
realistic spread of levels and streaks.
"""

from __future__ import annotations

import csv
import random
import sys
import tempfile
import time
from datetime import UTC, datetime, timedelta
from pathlib import Path

import psycopg
import typer

from badge_forge.infrastructure.db_factory import build_dsn, get_sync_connection

app = typer.Typer(help="Generate synthetic users/recipes and load into Postgres (CSV + COPY).")

USER_COLUMNS = ["id", "name", "email", "level", "badges", "verified"]
RECIPE_COLUMNS = ["user_id", "like_count", "created_at"]


def _build_dsn(dsn_override: str | None) -> str:
    if dsn_override:
        return dsn_override
    return build_dsn()


def _generate_users_csv(csv_path: Path, users: int) -> None:
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(USER_COLUMNS)
        for user_id in range(1, users + 1):
            writer.writerow(
                [user_id, f"user-{user_id}", f"user-{user_id}@example.com", 0, "{}", "f"]
            )


def _generate_recipes_csv(
    csv_path: Path,
    users: int,
    max_recipes: int,
    days: int,
    seed: int,
    now: datetime | None = None,
) -> int:
    """Write recipes for users 1..users; returns the number of rows written."""
    rng = random.Random(seed)
    end = now or datetime.now(UTC)
    written = 0

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(RECIPE_COLUMNS)
        for user_id in range(1, users + 1):
            for _ in range(rng.randint(0, max_recipes)):
                created_at = end - timedelta(
                    days=rng.randint(0, days - 1), seconds=rng.randint(0, 86_399)
                )
                writer.writerow([user_id, rng.randint(0, 50), created_at.isoformat()])
                written += 1
    return written


def _copy_into_db(dsn: str, table: str, columns: list[str], csv_path: Path) -> None:
    with get_sync_connection(dsn) as conn:
        with conn.cursor() as cur:
            with cur.copy(
                f"COPY public.{table} ({', '.join(columns)}) "
                "FROM STDIN WITH (FORMAT csv, HEADER TRUE)"
            ) as copy:
                with csv_path.open("r", encoding="utf-8") as f:
                    for line in f:
                        copy.write(line)
            if table == "users":
                # Explicit ids were loaded; move the sequence past them.
                cur.execute(
                    "SELECT setval('public.users_id_seq', "
                    "(SELECT COALESCE(MAX(id), 1) FROM public.users));"
                )
            conn.commit()


@app.command()
def main(
    users: int = typer.Option(100, "--users", "-u", help="Number of users to generate."),
    max_recipes: int = typer.Option(60, "--max-recipes", help="Upper bound of recipes per user."),
    days: int = typer.Option(60, "--days", help="Spread recipes over this many past days."),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Optional directory for the CSV files (if omitted, a temp dir will be used).",
    ),
    dsn: str | None = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
    no_load: bool = typer.Option(
        False, "--no-load", help="Only generate CSV; skip loading into Postgres."
    ),
) -> None:
    """
    Generate synthetic users and recipes and optionally load them using COPY.
    """
    start = time.perf_counter()
    out = output_dir or Path(tempfile.mkdtemp(prefix="badgeforge_csv_"))
    out.mkdir(parents=True, exist_ok=True)
    users_csv = out / "users.csv"
    recipes_csv = out / "recipes.csv"

    typer.echo(f"Generating {users:,} users -> {out} (max_recipes={max_recipes}, seed={seed})")
    _generate_users_csv(users_csv, users=users)
    recipe_count = _generate_recipes_csv(
        recipes_csv, users=users, max_recipes=max_recipes, days=days, seed=seed
    )
    typer.echo(
        f"CSV generation completed in {time.perf_counter() - start:.2f}s "
        f"({recipe_count:,} recipes)"
    )

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    conn_dsn = _build_dsn(dsn)
    typer.echo("Loading CSV into Postgres via COPY...")
    try:
        _copy_into_db(conn_dsn, "users", USER_COLUMNS, users_csv)
        _copy_into_db(conn_dsn, "recipes", RECIPE_COLUMNS, recipes_csv)
    except psycopg.Error as exc:
        typer.echo(f"Load failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Load completed. Total time {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
