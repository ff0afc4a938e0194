"""
Server configuration and feature flags.

Identity constants are fixed; everything else can be overridden through
environment variables so the server can be reconfigured without code changes.

Usage:
    from my_mcp_server.config.settings import is_enabled

    if is_enabled('image_generation'):
        registry.register(make_generate_image_operation(generator))

Environment Variables:
    HF_TOKEN=<token>                 - Inference access token (read per call)
    MY_MCP_IMAGE_MODEL=<model id>    - Text-to-image model
    MY_MCP_LOG_LEVEL=DEBUG|INFO|...  - Root log level
    ENABLE_IMAGE_GENERATION=true/false - Register the generate-image tool (1/yes/on also accepted)
"""

import os
from typing import Dict, Optional


# Server identity
SERVER_NAME = 'my-mcp-server'
SERVER_VERSION = '1.0.0'
SERVER_DESCRIPTION = 'MCP server providing greeting, calculator, time lookup and image generation.'
SERVER_INFO_URI = 'server://info'

# Image generation
HF_TOKEN_ENV = 'HF_TOKEN'
IMAGE_MODEL = os.getenv('MY_MCP_IMAGE_MODEL', 'stabilityai/stable-diffusion-xl-base-1.0')

# Logging
LOG_LEVEL = os.getenv('MY_MCP_LOG_LEVEL', 'INFO').upper()


def _env_flag(name: str, default: bool) -> bool:
    """Parse a boolean env var; "1", "true", "yes" and "on" switch it on."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


FEATURE_FLAGS: Dict[str, bool] = {
    'image_generation': _env_flag('ENABLE_IMAGE_GENERATION', True),
}


def get_hf_token() -> Optional[str]:
    """
    Read the inference access token from the environment.

    Read on every call so a token exported after startup is picked up.

    Returns:
        The token, or None if unset or blank
    """
    token = os.getenv(HF_TOKEN_ENV, '').strip()
    return token or None


def _require_flag(flag: str) -> None:
    if flag not in FEATURE_FLAGS:
        raise KeyError(f"No feature flag '{flag}' (known: {', '.join(sorted(FEATURE_FLAGS))})")


def is_enabled(flag: str) -> bool:
    """Whether ``flag`` is on. Raises KeyError for names not in FEATURE_FLAGS."""
    _require_flag(flag)
    return FEATURE_FLAGS[flag]


def get_all_flags() -> Dict[str, bool]:
    """Snapshot of every flag; mutating it leaves the live flags untouched."""
    return dict(FEATURE_FLAGS)


def set_flag(flag: str, enabled: bool) -> None:
    """Flip a known flag at runtime (tests, embedding hosts)."""
    _require_flag(flag)
    FEATURE_FLAGS[flag] = bool(enabled)
