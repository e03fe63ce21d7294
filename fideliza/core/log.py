import logging


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the "fideliza" logger: one console handler, timestamped format.
    Safe to call more than once; only the level is updated on repeat calls.
    """
    logger = logging.getLogger("fideliza")
    logger.setLevel((level or "INFO").upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
