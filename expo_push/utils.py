# expo_push/utils.py

import logging
from typing import Optional


class Utils:
    def __init__(self, logger_name: str = "expo_push", level: Optional[int] = None):
        self.logger = logging.getLogger(logger_name)
        # biblioteka nie konfiguruje handlerów, chyba że wywołujący o to poprosi
        if level is not None:
            if not self.logger.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
                self.logger.addHandler(handler)
            self.logger.setLevel(level)
        self.logger_max_level = logging.NOTSET

    def log_this(self, line: str, level: str = 'debug', exc_info=None):
        """
        Loguje wiadomość i zapamiętuje najwyższy użyty poziom.
        """
        log_level = getattr(logging, level.upper(), logging.DEBUG)
        self.logger.log(log_level, line, exc_info=exc_info)
        self.logger_max_level = max(self.logger_max_level, log_level)
