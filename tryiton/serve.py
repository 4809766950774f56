import uvicorn

from .config import settings


def main() -> None:
    uvicorn.run("tryiton.main:app", host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
