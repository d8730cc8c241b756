"""Store client backed by the redis-cli binary"""

import logging
import os
import shutil
import subprocess
from typing import Any, Dict, List, Optional

from keygate.infrastructure.store.base import StoreClient, StoreError

logger = logging.getLogger(__name__)


class RedisCliClient(StoreClient):
    """Runs ``redis-cli GET`` for each lookup.

    The password is handed over through ``REDISCLI_AUTH``, never on the
    command line.
    """

    name = "redis-cli"

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize redis-cli client

        Args:
            config: Optional configuration with:
                - binary: redis-cli executable name or path (default: redis-cli)
                - timeout: Seconds before a lookup is abandoned (default: 10)
        """
        if config is None:
            config = {}
        super().__init__(config)
        self.binary = config.get("binary", "redis-cli")
        self.timeout = config.get("timeout", 10.0)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate redis-cli client configuration"""
        if "binary" in config and not config["binary"]:
            raise ValueError("binary must be a non-empty string")
        if "timeout" in config:
            if not isinstance(config["timeout"], (int, float)) or config["timeout"] <= 0:
                raise ValueError("timeout must be a positive number")

    def is_available(self) -> bool:
        """Check that the redis-cli binary is on PATH"""
        return shutil.which(self.binary) is not None

    def unavailable_reason(self) -> str:
        return f"{self.binary} not found in PATH"

    def build_command(self, host: str, port: int, db: int, key: str) -> List[str]:
        """Build the redis-cli argument list for a GET"""
        return [self.binary, "-h", host, "-p", str(port), "-n", str(db), "GET", key]

    def get(
        self,
        host: str,
        port: int,
        db: int,
        key: str,
        password: Optional[str] = None,
    ) -> str:
        command = self.build_command(host, port, db, key)
        env = os.environ.copy()
        env.pop("REDISCLI_AUTH", None)
        if password:
            env["REDISCLI_AUTH"] = password

        logger.debug(f"Running: {' '.join(command)}")
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                env=env,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise StoreError(
                f"redis-cli timed out after {self.timeout}s",
                host=host,
                port=port,
                db=db,
                stderr=str(e),
            ) from e
        except OSError as e:
            raise StoreError(
                f"redis-cli could not be started: {e}",
                host=host,
                port=port,
                db=db,
                stderr=str(e),
            ) from e

        if completed.returncode != 0:
            raise StoreError(
                f"redis-cli exited with {completed.returncode}",
                host=host,
                port=port,
                db=db,
                returncode=completed.returncode,
                stderr=completed.stderr.strip(),
            )

        # Non-tty redis-cli prints an empty line for (nil)
        return completed.stdout.rstrip("\r\n")
