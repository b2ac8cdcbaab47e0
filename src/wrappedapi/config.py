# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for wrappedapi."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"wrappedapi/{__version__}"
DEFAULT_TIMEOUT = 10.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ApiSettings:
    """Transport defaults shared by every api definition."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("WRAPPEDAPI_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("WRAPPEDAPI_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("WRAPPEDAPI_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("WRAPPEDAPI_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_api_settings() -> ApiSettings:
    """Load api settings from environment with sensible defaults."""
    return ApiSettings.from_env()
