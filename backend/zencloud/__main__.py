"""Run the service with uvicorn: ``python -m zencloud``."""
import logging

import uvicorn

from zencloud.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(f"Server running on port {settings.API_PORT}...")
    uvicorn.run("zencloud.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
