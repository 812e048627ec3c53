# main.py

from uvicorn import run

from blogapi.configs import settings


def main() -> None:
    run(
        "blogapi.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    main()
