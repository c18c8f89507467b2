import logging


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# SQLAlchemy's engine echo drowns table previews built from ORM sessions.
_NOISY_LOGGERS = ("sqlalchemy.engine",)


def configure_logging(level: str | int = "INFO") -> int:
    """Initialize or update the root logger and the ``tabular`` loggers.

    Returns the numeric level that was applied.
    """
    desired_level, known = _resolve_level(level)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(desired_level)
        for handler in root.handlers:
            handler.setLevel(desired_level)
    else:
        logging.basicConfig(level=desired_level, format=LOG_FORMAT)

    package_logger = logging.getLogger("tabular")
    package_logger.setLevel(desired_level)
    if desired_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            noisy = logging.getLogger(name)
            if noisy.level == logging.NOTSET:
                noisy.setLevel(logging.WARNING)

    if not known:
        package_logger.warning("Unknown log level %r, using INFO", level)
    package_logger.info("Logging configured: level=%s", logging.getLevelName(desired_level))
    return desired_level


def _resolve_level(level: str | int) -> tuple[int, bool]:
    if isinstance(level, int):
        return level, True
    resolved = logging.getLevelName(str(level).strip().upper())
    if isinstance(resolved, int):
        return resolved, True
    return logging.INFO, False
