from __future__ import annotations

import asyncio
import json
import sys
from typing import Optional

import typer

from badge_forge.config import get_settings
from badge_forge.domain.models import UpdateRequest
from badge_forge.errors import BadgeForgeError
from badge_forge.infrastructure.db_factory import open_async_pool
from badge_forge.processor import BadgeForgeProcessor
from badge_forge.queue.in_memory import InMemoryQueue
from badge_forge.store.postgres import PostgresRecordStore
from badge_forge.utils.logging import configure_logging

app = typer.Typer(help="Badge Forge CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"api={settings.api_host}:{settings.api_port} "
        f"queue_capacity={settings.queue_capacity} env={settings.app_env}"
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from settings)."),
) -> None:
    """
    Run the HTTP API with the queue and processor attached.
    """
    import uvicorn

    from badge_forge.api.app import create_app

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    uvicorn.run(
        create_app(settings=settings),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
    )


async def _recompute(user_id: str) -> dict:
    settings = get_settings()
    pool = await open_async_pool(
        dsn=settings.dsn,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    try:
        processor = BadgeForgeProcessor(PostgresRecordStore(pool), InMemoryQueue(1))
        result = await processor.process_request(UpdateRequest(user_id=user_id).normalized())
    finally:
        await pool.close()
    return {
        "user_id": result.user_id,
        "level": result.level,
        "badges": list(result.badges),
        "verified": result.verified,
        "activity_count": result.activity_count,
    }


@app.command()
def recompute(user_id: str = typer.Argument(..., help="User to recompute.")) -> None:
    """
    Recompute one user's level and badges immediately, bypassing the queue.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    try:
        result = asyncio.run(_recompute(user_id))
    except BadgeForgeError as exc:
        typer.echo(f"Recompute failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(result, indent=2))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
