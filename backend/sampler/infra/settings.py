from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from sampler.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://cloud.appwrite.io/v1"
API_KEY_ENV_VARS = ("APPWRITE_FUNCTION_KEY", "APPWRITE_API_KEY")
API_KEY_HEADERS = ("x-appwrite-key", "x-appwrite-function-key")


@dataclass(frozen=True)
class PlatformSettings:
    endpoint: str
    project_id: str
    api_key: str


def load_platform_settings(headers: Optional[Mapping[str, str]] = None) -> PlatformSettings:
    """Platform credentials from the environment, falling back to request headers.

    Raises ``ConfigurationError`` when no API key can be found.
    """
    endpoint = os.getenv("APPWRITE_FUNCTION_API_ENDPOINT") or DEFAULT_ENDPOINT
    project_id = os.getenv("APPWRITE_FUNCTION_PROJECT_ID") or ""
    api_key = _first_env(API_KEY_ENV_VARS) or _first_header(headers, API_KEY_HEADERS)
    logger.debug("Endpoint: %s, project: %s, API key present: %s", endpoint, project_id, bool(api_key))
    if not api_key:
        logger.error("API key is missing")
        raise ConfigurationError("Server configuration error: API key missing")
    return PlatformSettings(endpoint=endpoint, project_id=project_id, api_key=api_key)


def _first_env(names) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def _first_header(headers: Optional[Mapping[str, str]], names) -> Optional[str]:
    if not headers:
        return None
    lowered = {key.lower(): value for key, value in headers.items()}
    for name in names:
        value = lowered.get(name)
        if value:
            return value
    return None
