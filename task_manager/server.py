import uvicorn

from task_manager.config import get_settings


def run() -> None:
    settings = get_settings()

    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["access"]["fmt"] = (
        "%(asctime)s %(levelname)-8s %(message)s"
    )
    log_config["formatters"]["default"]["fmt"] = (
        "%(asctime)s %(levelname)-8s %(message)s"
    )
    uvicorn.run(
        "task_manager.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=log_config,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
