"""Logger utility module for logging messages with configurable logging levels and handlers."""
import logging
import os
from datetime import datetime

ROOT_LOGGER_NAME = 'CityGrowth'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Logger:
    """Singleton logger class for the city generator.

    This class provides a centralized logging mechanism with configurable options
    for enabling/disabling logging and console or file output.
    """
    _instance = None
    _initialized = False
    _logging_enabled = True
    _log_to_console = True
    _log_to_file = False

    @classmethod
    def configure(cls, logging_enabled=True, log_to_console=True, log_to_file=False):
        """Configure global logging settings.

        Settings take effect the next time handlers are built, so a call made
        after the first logger was handed out resets the handlers.

        Args:
            logging_enabled: Whether logging is enabled globally.
            log_to_console: Whether to output logs to console.
            log_to_file: Whether to output logs to file.
        """
        cls._logging_enabled = logging_enabled
        cls._log_to_console = log_to_console
        cls._log_to_file = log_to_file
        if cls._initialized:
            cls._initialized = False
            root = logging.getLogger(ROOT_LOGGER_NAME)
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()

    @classmethod
    def configure_from(cls, config):
        """Configure logging from the ``logging`` section of a Config.

        Args:
            config: A loaded Config instance.
        """
        cls.configure(
            logging_enabled=config.get('logging.enabled', True),
            log_to_console=config.get('logging.console', True),
            log_to_file=config.get('logging.file', False),
        )

    def __new__(cls):
        """Create or return the singleton instance of Logger.

        Returns:
            The singleton Logger instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Build the root handlers if not already done.

        A log file is created with a timestamp in the filename when file
        logging is enabled.
        """
        if Logger._initialized:
            return
        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        if Logger._logging_enabled:
            self.logger.setLevel(logging.DEBUG)
            self.logger.propagate = True

            if Logger._log_to_file:
                os.makedirs('logs', exist_ok=True)
                current_time = datetime.now().strftime('%Y%m%d_%H%M%S')
                file_handler = logging.FileHandler(f'logs/citygrowth_{current_time}.log')
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
                self.logger.addHandler(file_handler)

            if Logger._log_to_console:
                console_handler = logging.StreamHandler()
                console_handler.setLevel(logging.INFO)
                console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
                self.logger.addHandler(console_handler)
        else:
            # null logger when logging is disabled
            self.logger.addHandler(logging.NullHandler())
            self.logger.propagate = False

        Logger._initialized = True

    @staticmethod
    def get_logger(name=None):
        """Get a logger instance, optionally as a child logger with the specified name.

        Args:
            name: Optional name for child logger.

        Returns:
            A configured logger instance.
        """
        logger_instance = Logger()
        if name:
            return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        return logger_instance.logger
