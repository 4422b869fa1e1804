import logging
import os
import re
from logging.handlers import RotatingFileHandler
from places_proxy.core.config import settings

_KEY_PARAM = re.compile(r"(?i)([?&]key=)[^&\s\"']+")

def redact(text: str, secret: str = None) -> str:
    """Masks `key=` query values and, when given, every occurrence of the secret."""
    if secret:
        text = text.replace(secret, "HIDDEN_KEY")
    return _KEY_PARAM.sub(r"\1HIDDEN_KEY", text)


class RedactingFilter(logging.Filter):
    """Strips API keys from records before any handler writes them."""

    _formatter = logging.Formatter()

    def filter(self, record: logging.LogRecord) -> bool:
        secret = settings.GOOGLE_MAPS_API_KEY
        message = record.getMessage()
        cleaned = redact(message, secret)
        if cleaned != message:
            record.msg = cleaned
            record.args = None

        # Formatters reuse exc_text when it is already set
        if record.exc_info and not record.exc_text:
            record.exc_text = self._formatter.formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = redact(record.exc_text, secret)
        if record.stack_info:
            record.stack_info = redact(record.stack_info, secret)
        return True


class LoggerConfig:
    """
    Logger configuration class to setup logging for the application.
    """
    def __init__(
        self, env=20, logger_name="PlacesProxy", log_directory="logs", log_file="app.log", log_to_file=True
    ):
        try:
            self.logger_name = logger_name
            self.log_directory = os.path.abspath(log_directory)
            self.log_file_path = os.path.join(self.log_directory, log_file)
            self.log_to_file = log_to_file
            self.env = env
            self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

            self.logger = logging.getLogger(self.logger_name)
            self.setup_logger()
        except Exception as e:
            print(f"Failed to initialize logger: {str(e)}")

    def setup_logger(self):
        try:
            formatter = logging.Formatter(self.log_format)
            redacting_filter = RedactingFilter()
            handlers = []

            if self.log_to_file:
                os.makedirs(self.log_directory, exist_ok=True)
                file_handler = RotatingFileHandler(
                    self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
                )
                handlers.append(file_handler)

            handlers.append(logging.StreamHandler())

            # Avoid adding duplicate handlers if re-initialized
            if not self.logger.handlers:
                for handler in handlers:
                    handler.setLevel(self.env)
                    handler.setFormatter(formatter)
                    handler.addFilter(redacting_filter)
                    self.logger.addHandler(handler)

            self.logger.setLevel(self.env)

            # httpx logs full request URLs, which carry the key
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

        except Exception as e:
            print(f"Failed to setup logger handlers: {str(e)}")

    def log(self, level: int, message: str, extra: dict = None, exc_info: bool = False):
        """Simple wrapper to log messages"""
        if extra:
            message = f"{message} | {extra}"
        self.logger.log(level, message, exc_info=exc_info)

# Initialize Logger
logs = LoggerConfig(
    env=settings.LOGGER,
    logger_name="PLACES-PROXY",
    log_directory=settings.LOG_DIRECTORY,
    log_file=settings.LOG_FILE,
    log_to_file=settings.LOG_TO_FILE
)
