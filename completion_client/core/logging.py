# ------------------------------------------------------------
# Module: completion_client/core/logging.py
# Purpose: One-time stdout logging setup for CLI and embedding applications.
# ------------------------------------------------------------

"""Configure stdout-based logging for the completion client.

Notes
-----
- Library modules only call `logging.getLogger(__name__)`; nothing is
  configured on import. Applications (or the CLI) call `configure_logging()`.
- `basicConfig` is a no-op when the root logger already has handlers.
"""

import logging
import sys

from completion_client.core.config import Settings
from completion_client.core.config import settings as _settings


def configure_logging(settings: Settings = _settings) -> None:
    """Initialize global logging once at startup.

    Notes
    -----
    - Hard-mutes all logs if `MUTE_ALL_LOGS` is set.
    - Keeps `urllib3` connection chatter at WARNING unless DEBUG is requested.
    """
    if settings.MUTE_ALL_LOGS:
        logging.disable(logging.CRITICAL)
        return

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("completion_client").setLevel(settings.LOG_LEVEL)

    if settings.LOG_LEVEL != "DEBUG":
        logging.getLogger("urllib3").setLevel(logging.WARNING)
