"""Run the API with uvicorn: `python -m fleet_api`."""

import uvicorn

from fleet_api.config import settings


def main() -> None:
    uvicorn.run(
        "fleet_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
