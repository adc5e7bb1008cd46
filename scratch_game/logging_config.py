import logging

from pythonjsonlogger import jsonlogger

TEXT_FORMAT = '%(asctime)s %(levelname)s [%(round_id)s] %(name)s: %(message)s'
JSON_FORMAT = '%(asctime)s %(levelname)s %(round_id)s %(module)s %(funcName)s %(lineno)d %(message)s'


# Custom Logging Filter for Round ID
class RoundIdFilter(logging.Filter):
    def filter(self, record):
        if not hasattr(record, 'round_id'):
            record.round_id = 'N/A'
        return True


def configure_logging(config_class, level=None):
    """Installs a single stream handler on the package logger."""
    logger = logging.getLogger('scratch_game')
    handler = logging.StreamHandler()
    if config_class.LOG_FORMAT == 'json':
        formatter = jsonlogger.JsonFormatter(JSON_FORMAT)
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)
    handler.addFilter(RoundIdFilter())
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level or config_class.LOG_LEVEL, logging.INFO))
    logger.propagate = False
    return logger
