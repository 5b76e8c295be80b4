import logging

logger = logging.getLogger("ajimi")

if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(logging.INFO)


def set_level(level: str | int):
    logger.setLevel(level.upper() if isinstance(level, str) else level)
