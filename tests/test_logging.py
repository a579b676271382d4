import logging

import yaml

from stroop_experiment.utils.logging import configure_logging, logger


def file_handlers(path) -> list[logging.FileHandler]:
    return [
        h
        for h in logger.handlers
        if isinstance(h, logging.FileHandler) and h.baseFilename == str(path)
    ]


def test_configure_logging_twice_adds_one_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "stroop.log"
    cfg_file = tmp_path / "logging.yaml"
    cfg_file.write_text(yaml.safe_dump({"log_file": str(log_file), "level": "INFO"}))
    level = logger.level

    try:
        configure_logging(cfg_file)
        configure_logging(cfg_file, logger_level="DEBUG")

        assert len(file_handlers(log_file)) == 1
        assert logger.level == logging.DEBUG

        logger.info("written once")
        file_handlers(log_file)[0].flush()
        assert log_file.read_text().count("written once") == 1
    finally:
        for h in file_handlers(log_file):
            logger.removeHandler(h)
            h.close()
        logger.setLevel(level)
