"""Run the API server: python -m data_alchemist"""

import uvicorn

from data_alchemist.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "data_alchemist.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
