import logging
import os
from logging.handlers import RotatingFileHandler

LOG_DIR_ENV = 'NEXOS_MODELS_LOG_DIR'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 9


def resolve_log_dir() -> str:
    """Return the log directory, creating it if needed."""
    log_dir = os.environ.get(LOG_DIR_ENV) or os.path.join(
        os.path.expanduser('~'), '.cache', 'opencode-nexos-models-config', 'logs'
    )
    os.makedirs(log_dir, exist_ok=True)
    return log_dir


def _file_handler(path: str, level: int) -> RotatingFileHandler:
    # Files are opened on first record, so runs that log nothing leave no trace
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, mode='w', delay=True)
    handler.setLevel(level)
    return handler


LOG_DIR = resolve_log_dir()
INFO_LOG_FILE = os.path.join(LOG_DIR, 'nexosModels.log')
DEBUG_LOG_FILE = os.path.join(LOG_DIR, 'nexosModels_debug.log')

logger = logging.getLogger('nexosModels')
logger.setLevel(logging.DEBUG)

# Guard against double registration when the module is reloaded
if not logger.handlers:
    formatter = logging.Formatter(LOG_FORMAT)

    # Only warnings reach the terminal (stderr); everything else goes to file
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)

    for handler in (
        _file_handler(INFO_LOG_FILE, logging.INFO),
        _file_handler(DEBUG_LOG_FILE, logging.DEBUG),
        console_handler,
    ):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
