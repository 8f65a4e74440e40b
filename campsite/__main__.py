"""Serve the campsite API with uvicorn: ``python -m campsite``."""

import uvicorn

from campsite.config import settings


def main() -> None:
    uvicorn.run(
        "campsite.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
