import logging
import os
from copy import deepcopy
from pathlib import Path

import yaml
from dareplane_utils.logging.logger import get_logger

logger = get_logger("stroop_experiment", add_console_handler=True)


def add_file_handler(
    file_path: Path = Path("stroop_experiment.log"),
) -> logging.FileHandler:
    # add a local file handler, same format as the console but without colors
    # only one handler per file, repeated runs in one process reuse it
    abs_path = os.path.abspath(file_path)
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == abs_path:
            return h

    fh = logging.FileHandler(file_path)
    formatter = deepcopy(logger.handlers[0].formatter)
    formatter.no_color = True  # type: ignore

    fh.formatter = formatter

    logger.addHandler(fh)
    return fh


def configure_logging(cfg_file: Path, logger_level: str | None = None):
    """Attach the file handler and set the level as configured in `cfg_file`.

    A given `logger_level` overwrites the level from the config.
    """
    log_cfg = yaml.safe_load(open(cfg_file))
    log_path = Path(log_cfg["log_file"])
    log_path.parent.mkdir(exist_ok=True, parents=True)
    add_file_handler(log_path)
    logger.setLevel(log_cfg["level"])

    if logger_level is not None:
        logger.setLevel(logger_level)
