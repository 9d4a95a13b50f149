import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class SessionKeeperSettings(BaseSettings):
    """SessionKeeper service configuration.

    Process-level settings come from the environment. Maintenance thresholds
    live in the JSON file at ``sessions_config_path`` under
    ``session.maintenance`` and are read through :func:`load_config`.
    """

    sessions_path: str = "~/.sessionkeeper/sessions.json"
    sessions_config_path: str = "~/.sessionkeeper/config.json"
    sessionkeeper_service_port: int = 8110
    sessionkeeper_service_token: Optional[str] = None
    auto_maintain: bool = False

    model_config = {"env_prefix": "", "case_sensitive": False}

    @field_validator("sessions_path", "sessions_config_path")
    @classmethod
    def expand_user(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Path must not be empty")
        return str(Path(v).expanduser())


def load_config(path: str | None = None) -> dict:
    """Load the JSON configuration file.

    A missing file yields an empty dict. A file that cannot be parsed, or whose
    top level is not an object, is logged and also treated as empty so the
    built-in maintenance defaults apply.
    """
    if path is None:
        path = SessionKeeperSettings().sessions_config_path
    config_path = Path(path).expanduser()
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not an object", config_path)
        return {}
    return data
