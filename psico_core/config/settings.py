# =============================================================================
# psico_core/config/settings.py
# Runtime configuration: Streamlit secrets -> environment -> defaults
# =============================================================================
"""
Settings for the dashboard.

Expected secrets.toml format (all keys optional):

    [api]
    base_url = "https://noode-js-pi-1-25.onrender.com"
    timeout = 30
    session_ttl_hours = 24
    public_coordenacao_id = 2
    log_level = "INFO"
    log_to_file = false

Environment variables are only consulted for keys missing from
secrets (PSICO_API_URL, PSICO_API_TIMEOUT,
PSICO_SESSION_TTL_HOURS, PSICO_PUBLIC_COORDENACAO_ID, PSICO_LOG_LEVEL,
PSICO_LOG_TO_FILE).
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from psico_core.errors import ConfigurationError
from psico_core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://noode-js-pi-1-25.onrender.com"
DEFAULT_SESSION_TTL_HOURS = 24
DEFAULT_PUBLIC_COORDENACAO_ID = 2

ENV_KEYS = {
    "base_url": "PSICO_API_URL",
    "timeout": "PSICO_API_TIMEOUT",
    "session_ttl_hours": "PSICO_SESSION_TTL_HOURS",
    "public_coordenacao_id": "PSICO_PUBLIC_COORDENACAO_ID",
    "log_level": "PSICO_LOG_LEVEL",
    "log_to_file": "PSICO_LOG_TO_FILE",
}


@dataclass(frozen=True)
class Settings:
    """Resolved application settings"""
    base_url: str = DEFAULT_API_URL
    timeout: Optional[float] = None  # no timeout unless configured
    session_ttl_hours: float = DEFAULT_SESSION_TTL_HOURS
    public_coordenacao_id: int = DEFAULT_PUBLIC_COORDENACAO_ID
    log_level: str = "INFO"
    log_to_file: bool = False

    @property
    def session_ttl_ms(self) -> int:
        return int(self.session_ttl_hours * 60 * 60 * 1000)


def _read_secrets() -> Dict[str, Any]:
    """Return the [api] table from Streamlit secrets, or {} when absent."""
    try:
        import streamlit as st

        if "api" in st.secrets:
            return dict(st.secrets["api"])
    except FileNotFoundError:
        pass
    except Exception as e:
        # st.secrets raises its own parse errors for malformed secrets.toml
        logger.warning(f"Could not read Streamlit secrets: {e}")
    return {}


def _coerce(key: str, value: Any, cast, expected: str):
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid value for '{key}': {value!r}",
            config_key=key,
            expected_type=expected,
        )


TRUE_WORDS = ("true", "1", "yes", "on")
FALSE_WORDS = ("false", "0", "no", "off")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ValueError(word)


def load_settings(
    secrets: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from secrets, then environment, then defaults.

    Args:
        secrets: Mapping standing in for st.secrets["api"] (read from
            Streamlit when None)
        environ: Mapping standing in for os.environ

    Raises:
        ConfigurationError: when a value cannot be coerced
    """
    secrets = dict(_read_secrets() if secrets is None else secrets)
    environ = os.environ if environ is None else environ

    raw: Dict[str, Any] = {}
    for key, env_key in ENV_KEYS.items():
        if key in secrets and secrets[key] not in (None, ""):
            raw[key] = secrets[key]
        elif environ.get(env_key):
            raw[key] = environ[env_key]

    base_url = str(raw.get("base_url", DEFAULT_API_URL)).strip().rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"API base URL must be http(s): {base_url!r}",
            config_key="base_url",
            expected_type="url",
        )

    timeout = None
    if "timeout" in raw:
        timeout = _coerce("timeout", raw["timeout"], float, "float")
        if timeout <= 0:
            timeout = None

    ttl = _coerce(
        "session_ttl_hours",
        raw.get("session_ttl_hours", DEFAULT_SESSION_TTL_HOURS),
        float,
        "float",
    )
    if ttl <= 0:
        raise ConfigurationError(
            "Session TTL must be positive",
            config_key="session_ttl_hours",
            expected_type="positive float",
        )

    settings = Settings(
        base_url=base_url,
        timeout=timeout,
        session_ttl_hours=ttl,
        public_coordenacao_id=_coerce(
            "public_coordenacao_id",
            raw.get("public_coordenacao_id", DEFAULT_PUBLIC_COORDENACAO_ID),
            int,
            "int",
        ),
        log_level=str(raw.get("log_level", "INFO")).upper(),
        log_to_file=_coerce("log_to_file", raw.get("log_to_file", False), _as_bool, "bool"),
    )
    logger.debug(f"Loaded settings for API {settings.base_url}")
    return settings
