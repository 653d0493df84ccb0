import logging


def setup_logging(level: str = "INFO") -> None:
    """Настройка логирования приложения (вызывается один раз при старте)"""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
    ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
