import logging
from typing import Optional, Dict

from testproxy.configuration import configuration

class ConfigureLogger:
    """
    Logging setup for test runs. With `trace` enabled the `testproxy` loggers report every
    member resolution, constructor selection and differing property at DEBUG level.
    `trace` defaults to the configuration value `logging.trace` (env `TESTPROXY_LOGGING__TRACE`).
    """
    root = "testproxy"

    # constructor

    def __init__(self,
                 default_level: int = logging.INFO,
                 trace: Optional[bool] = None,
                 levels: Optional[Dict[str, int]] = None,
                 format: str = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"):
        logging.basicConfig(level=default_level, format=format)

        if trace is None:
            trace = configuration().get("logging.trace", bool, False)

        self.trace = trace
        self.levels = {ConfigureLogger.root: logging.DEBUG if trace else default_level}
        self.levels.update(levels or {})

        for name, level in self.levels.items():
            logging.getLogger(name).setLevel(level)

    # public

    def is_tracing(self, name: str = root) -> bool:
        """
        return True if the named logger emits resolution traces
        """
        return logging.getLogger(name).isEnabledFor(logging.DEBUG)
