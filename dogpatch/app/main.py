import sys
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

from loguru import logger

from dogpatch.app.composition import create_client_dependencies
from dogpatch.app.config.settings import Settings
from dogpatch.app.core import SERVICE_NAME
from dogpatch.app.domain.outcome import Success


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper())


def run_once(settings: Settings) -> int:
    """Fetch dogs once and log the outcome. Returns a process exit code."""
    dependencies = create_client_dependencies(settings)
    dependencies.connect()
    try:
        outcome = dependencies.client.get_dogs_outcome().result(
            timeout=settings.fetch_timeout_seconds,
        )
    except FutureTimeoutError:
        logger.error("no response within {}s", settings.fetch_timeout_seconds)
        return 1
    finally:
        dependencies.close()

    if isinstance(outcome, Success):
        _log("dogs_fetched", count=len(outcome.dogs))
        for dog in outcome.dogs:
            _log("dog", id=str(dog.id), name=dog.name, breed=dog.breed, cost=str(dog.cost))
        return 0

    if outcome.error is None:
        _log("dogs_fetch_failed", reason="unexpected status")
    else:
        _log("dogs_fetch_failed", reason=type(outcome.error).__name__, error=str(outcome.error))
    return 1


def main() -> None:
    settings = Settings()
    configure_logging(settings)
    _log("client_starting")
    try:
        code = run_once(settings)
    except KeyboardInterrupt:
        _log("client_interrupted")
        code = 130
    except Exception as e:
        logger.exception("client failed: {}", e)
        raise
    _log("client_stopped", exit_code=code)
    sys.exit(code)


if __name__ == "__main__":
    main()
