import uvicorn

from tripplanner.config import settings


def main():
    uvicorn.run("tripplanner.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
