"""Runs the API server: `python -m noteshelf`."""

import uvicorn

from noteshelf.config import settings


def main() -> None:
    uvicorn.run(
        "noteshelf.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
