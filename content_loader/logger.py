import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logger(name="content_loader", level=logging.INFO, log_file=None):
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Una segunda llamada solo ajusta el nivel
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    # stderr: stdout queda libre para el JSON del CLI
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    log_file = log_file or os.getenv("CONTENT_LOADER_LOG_FILE")
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


logger = setup_logger()
