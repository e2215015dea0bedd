# statusdog/logging_config.py

import logging
import logging.config
import os


def setup_logging(log_dir: str, level: str = "INFO"):
    """
    Installs the StatusDog log handlers and returns the path of the log file.
    DESIGNER'S NOTE:
    Backend calls, image probes and storage writes all log through the root logger, so one
    dictConfig covers the app. Stdout is what `statusdog` prints while it runs; statusdog.log keeps
    the same records across restarts and is rotated at 5 MB. An unknown level name means INFO.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_file_path = os.path.join(log_dir, 'statusdog.log')
    if not isinstance(logging.getLevelName(level), int):
        level = 'INFO'

    sinks = ['console', 'rotating_file']
    # Gradio's HTTP client and requests' pool are chatty at INFO
    quiet = {name: {'handlers': sinks, 'level': 'WARNING', 'propagate': False} for name in ('httpx', 'urllib3')}

    LOGGING_CONFIG = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'default',
                'level': level,
                'stream': 'ext://sys.stdout',
            },
            'rotating_file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'formatter': 'default',
                'level': level,
                'filename': log_file_path,
                'maxBytes': 1024 * 1024 * 5,  # 5 MB
                'backupCount': 5,
                'encoding': 'utf-8',
            },
        },
        'loggers': {'': {'handlers': sinks, 'level': level}, **quiet},
    }

    logging.config.dictConfig(LOGGING_CONFIG)
    root_logger = logging.getLogger()
    root_logger.info("Logging system initialized successfully.")
    root_logger.info(f"Log files will be saved to: {log_file_path}")
    return log_file_path
