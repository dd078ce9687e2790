# core/app.py

import logging
from typing import Optional

from core.config import LOG_LEVEL
from core.script_host import ScriptHost
from game.engine import GameEngine

log = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


def run(game: GameEngine, url: str, script_path: str, timeout: Optional[float] = None) -> int:
    """
    Run `script_path` against `game` until the script exits and return the
    process exit code.  Building the game client is the caller's job.
    """
    configure_logging()
    host = ScriptHost(game, url, script_path)
    host.go()

    code = host.wait(timeout)
    if code is None:
        log.error("[SCRIPT] %s did not exit within %s seconds", script_path, timeout)
        return 1
    return code
