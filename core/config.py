# =============================================================================
# core/config.py  -  Process-wide settings read from the environment
# =============================================================================
#
# The server needs exactly one secret: the Jina.ai bearer token.  It is read
# once at startup; a missing token is fatal before any MCP traffic happens.
#
# ENVIRONMENT VARIABLES:
#   JINAAI_API_KEY  (required)  Bearer credential for https://s.jina.ai
#   MCP_LOG_LEVEL   (optional)  stderr log level for the server (default INFO)
#
# Entry points call load_dotenv() first, so both variables may also live in
# a .env file at the project root.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

API_KEY_ENV = "JINAAI_API_KEY"
LOG_LEVEL_ENV = "MCP_LOG_LEVEL"


class MissingCredentialError(RuntimeError):
    """Raised at startup when the Jina.ai API key is not configured."""


@dataclass(frozen=True)
class Settings:
    api_key: str
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return f"Settings(api_key='***', log_level={self.log_level!r})"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from ``environ`` (defaults to ``os.environ``).

    Raises:
        MissingCredentialError: if JINAAI_API_KEY is unset or blank.
    """
    env = os.environ if environ is None else environ

    api_key = env.get(API_KEY_ENV, "").strip()
    if not api_key:
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable is required")

    log_level = env.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = "INFO"
    return Settings(api_key=api_key, log_level=log_level)
