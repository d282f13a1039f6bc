import logging


def configure_logging(log_level: str) -> None:
    """Configure process-wide logging for the daybook backend."""

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # httpx emits one INFO line per request
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
