"""Process entrypoint that serves the catalog API with uvicorn."""

from __future__ import annotations

import uvicorn

from library_catalog.api.api_config import get_api_config
from library_catalog.common.logging import configure_logging


def main() -> None:
    configure_logging()
    config = get_api_config()
    # uvicorn drives the lifespan handler, which opens and disposes the store client.
    uvicorn.run(
        "library_catalog.api.app:app",
        host=config.host,
        port=config.port,
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":
    main()
