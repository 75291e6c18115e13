import logging
import os

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class Logger:
    """Logging utility cho toàn bộ package"""

    def __init__(self, name, log_file=None, level="info"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Handler chỉ gắn một lần cho mỗi logger name
        if not any(getattr(h, "_edpem", False) for h in self.logger.handlers):
            console_handler = logging.StreamHandler()
            console_handler.setLevel(LEVELS.get(level, logging.INFO))
            console_handler.setFormatter(logging.Formatter(FORMAT))
            console_handler._edpem = True
            self.logger.addHandler(console_handler)

        if log_file and not any(
            getattr(h, "baseFilename", None) == os.path.abspath(log_file)
            for h in self.logger.handlers
        ):
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FORMAT))
            self.logger.addHandler(file_handler)

    def log(self, message, level="info"):
        """Log message"""
        self.logger.log(LEVELS.get(level, logging.INFO), message)
