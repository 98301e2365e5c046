import logging

from logging_config import LOGGER_NAME, setup_logging


def test_setup_logging_is_repeatable_and_writes_file(tmp_path):
    log_file = tmp_path / 'game.log'
    logger = logging.getLogger(LOGGER_NAME)
    try:
        setup_logging('DEBUG')
        setup_logging(logging.INFO, log_file=str(log_file))
        assert len(logger.handlers) == 2
        assert logger.level == logging.INFO
        logging.getLogger(f'{LOGGER_NAME}.engine').info('session 1 started')
        for handler in logger.handlers:
            handler.flush()
        assert 'catchgame.engine - INFO - session 1 started' in log_file.read_text(encoding='utf-8')
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


def test_unknown_level_name_falls_back_to_info():
    logger = logging.getLogger(LOGGER_NAME)
    try:
        setup_logging('LOUD')
        assert logger.level == logging.INFO
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
