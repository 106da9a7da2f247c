import uvicorn

from employee_api.core.config import settings


def main() -> None:
    # Listening port is fixed by configuration, not by command-line flags
    uvicorn.run("employee_api.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
