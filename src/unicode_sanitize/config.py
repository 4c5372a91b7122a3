# src/unicode_sanitize/config.py
"""Configuration management for unicode-sanitize.

Named constants, the two Options presets, and an environment overlay for
callers (the command-line harness) that want to configure the sanitizer
from outside. Environment getters take an env object and read attributes
from it, so tests can pass a plain namespace.
"""

from dataclasses import replace
from typing import Any

from unicode_sanitize.models import Options
from unicode_sanitize.utils import log_op

# =============================================================================
# Constants
# =============================================================================

# Visible marker used by the debug preset for every replaced span
DEBUG_MARKER = " { SANITIZED } "

# Default preset replacements
DEFAULT_REPLACEMENT = ""
DEFAULT_TAB_REPLACEMENT = " "
DEFAULT_LINEFEED_REPLACEMENT = " "
DEFAULT_FORMFEED_REPLACEMENT = " "
DEFAULT_UNKNOWN_REPLACEMENT = "?"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# =============================================================================
# Presets
# =============================================================================


def default_options() -> Options:
    """Destructive preset: evil spans vanish, whitespace collapses to spaces."""
    return Options(
        strip_reserved=False,
        allow_newlines=False,
        replacement_default=DEFAULT_REPLACEMENT,
        replacement_tab=DEFAULT_TAB_REPLACEMENT,
        replacement_linefeed=DEFAULT_LINEFEED_REPLACEMENT,
        replacement_formfeed=DEFAULT_FORMFEED_REPLACEMENT,
        replacement_unknown=DEFAULT_UNKNOWN_REPLACEMENT,
    )


def debug_options() -> Options:
    """Diagnostic preset: every replaced span becomes DEBUG_MARKER.

    Meant for tests and for eyeballing which sequences were matched, never
    for production output.
    """
    return Options(
        strip_reserved=False,
        allow_newlines=False,
        replacement_default=DEBUG_MARKER,
        replacement_tab=DEBUG_MARKER,
        replacement_linefeed=DEBUG_MARKER,
        replacement_formfeed=DEBUG_MARKER,
        replacement_unknown=DEBUG_MARKER,
    )


# =============================================================================
# Configuration Getters
# =============================================================================


def get_bool_config(env: Any, env_key: str, default: bool) -> bool:
    """Get a boolean configuration value from environment.

    Accepts 1/true/yes/on and 0/false/no/off, case-insensitively.

    Args:
        env: Environment object (attribute access)
        env_key: The environment variable name
        default: Default value if not set or unparseable

    Returns:
        The configured value or default.
    """
    value = getattr(env, env_key, None)
    if value is None or value == "":
        return default
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    log_op(
        "config_validation_error",
        config_key=env_key,
        error=f"not a boolean: {value!r}",
    )
    return default


def get_str_config(env: Any, env_key: str, default: str) -> str:
    """Get a string configuration value from environment.

    An empty string is a legitimate replacement, so only a missing key falls
    back to the default. A value that cannot be written as UTF-8 (non-UTF-8
    bytes in os.environ arrive surrogate-escaped) is logged and ignored.
    """
    value = getattr(env, env_key, None)
    if value is None:
        return default
    value = str(value)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        log_op(
            "config_validation_error",
            config_key=env_key,
            error=f"not valid UTF-8: {value!r}",
        )
        return default
    return value


# =============================================================================
# Config Registry
# =============================================================================

# Options field -> environment variable
_BOOL_CONFIG_REGISTRY: dict[str, str] = {
    "strip_reserved": "SANITIZE_STRIP_RESERVED",
    "allow_newlines": "SANITIZE_ALLOW_NEWLINES",
}

_STR_CONFIG_REGISTRY: dict[str, str] = {
    "replacement_default": "SANITIZE_REPLACEMENT_DEFAULT",
    "replacement_tab": "SANITIZE_REPLACEMENT_TAB",
    "replacement_linefeed": "SANITIZE_REPLACEMENT_LINEFEED",
    "replacement_formfeed": "SANITIZE_REPLACEMENT_FORMFEED",
    "replacement_unknown": "SANITIZE_REPLACEMENT_UNKNOWN",
}


def options_from_env(env: Any, base: Options | None = None) -> Options:
    """Overlay SANITIZE_* environment values onto a base Options.

    Args:
        env: Environment object (attribute access)
        base: Options to start from, default_options() if omitted

    Returns:
        A new Options; base is never modified.
    """
    base = base or default_options()
    overrides: dict[str, Any] = {}
    for field_name, env_key in _BOOL_CONFIG_REGISTRY.items():
        overrides[field_name] = get_bool_config(env, env_key, getattr(base, field_name))
    for field_name, env_key in _STR_CONFIG_REGISTRY.items():
        overrides[field_name] = get_str_config(env, env_key, getattr(base, field_name))
    return replace(base, **overrides)
