"""
tiffin_session.credential_store.__main__

Run the development credential store:

    python -m tiffin_session.credential_store [--host H] [--port P] [--database-url URL]

Flags override the matching `TIFFIN_*` environment settings.
"""

from __future__ import annotations

import click
import uvicorn

from tiffin_session import __version__
from tiffin_session.credential_store.app import create_app
from tiffin_session.settings import Settings, get_settings


def settings_with_overrides(
    settings: Settings,
    *,
    host: str | None = None,
    port: int | None = None,
    database_url: str | None = None,
) -> Settings:
    overrides = {"store_host": host, "store_port": port, "database_url": database_url}
    return settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})


@click.command(name="tiffin-credential-store")
@click.version_option(version=__version__, prog_name="tiffin-credential-store")
@click.option("--host", help="Bind address (or set TIFFIN_STORE_HOST)")
@click.option("--port", type=int, help="Bind port (or set TIFFIN_STORE_PORT)")
@click.option("--database-url", help="SQLAlchemy async URL (or set TIFFIN_DATABASE_URL)")
def main(host: str | None, port: int | None, database_url: str | None) -> None:
    """Serve the development credential store."""
    settings = settings_with_overrides(
        get_settings(), host=host, port=port, database_url=database_url
    )
    click.echo(f"credential store on http://{settings.store_host}:{settings.store_port}/api")

    uvicorn.run(
        create_app(settings=settings),
        host=settings.store_host,
        port=settings.store_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
