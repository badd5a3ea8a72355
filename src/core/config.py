"""
Runtime configuration.

Plain module constants, each one can be overridden with an environment variable of the same name prefixed by `UR_`.
"""

import os

# Seconds the auto-pass waits so a presentation layer can show the roll before the turn switches
AUTO_PASS_DELAY: float = float(os.getenv("UR_AUTO_PASS_DELAY", "0.8"))

# Finished-game summaries live in memory by default: nothing should outlive the process
DATABASE_URL: str = os.getenv("UR_DATABASE_URL", "sqlite:///:memory:")
DATABASE_ECHO: bool = os.getenv("UR_DATABASE_ECHO", "false").lower() in ("1", "true", "yes")

# Maximum number of narration lines kept by the game log
LOG_CAPACITY: int = int(os.getenv("UR_LOG_CAPACITY", "200"))
