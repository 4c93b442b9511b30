import logging
from typing import Optional, Dict

class ConfigureLogger:
    """
    syntactic sugar for applications and tests: configures the root handler and per logger levels,
    e.g. `ConfigureLogger(levels={"beanspyx": logging.DEBUG})`
    """
    # constructor

    def __init__(self,
                 default_level: int = logging.INFO,
                 format: str = "[%(asctime)s] %(levelname)s in %(filename)s:%(lineno)d - %(message)s",
                 levels: Optional[Dict[str, int]] = None):
        logging.basicConfig(level=default_level, format=format)

        self.levels = dict(levels or {})
        for name, level in self.levels.items():
            logging.getLogger(name).setLevel(level)

    # public

    @staticmethod
    def parse_level(level) -> int:
        """
        accept either a numeric level or a level name such as "debug"
        """
        if isinstance(level, int):
            return level

        value = logging.getLevelName(str(level).upper())
        if not isinstance(value, int):
            raise ValueError(f"unknown log level {level}")

        return value
