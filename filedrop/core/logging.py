import logging
import os

def configure_logging(level: str = "INFO", log_dir: str = "logs"):
    logger = logging.getLogger()
    if logger.hasHandlers():
        return
    logger.setLevel(level.upper())

    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, "app.log"))
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)
