"""Non-fatal checks on raw configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Return warnings for settings that are valid but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    sources = config_dict.get("sources") or []
    for source in sources:
        if not isinstance(source, dict):
            continue
        name = source.get("name", "Unknown")
        if not source.get("enabled", True):
            warning_messages.append(f"Source '{name}' is disabled and will be skipped")
        if source.get("required_flair") == "":
            warning_messages.append(
                f"Source '{name}' has no required_flair; every post will be parsed"
            )
        if not source.get("section_titles"):
            warning_messages.append(
                f"Source '{name}' declares no section_titles; section checks are skipped"
            )
        mappings = source.get("field_mappings")
        if isinstance(mappings, dict) and not any(
            isinstance(entry, dict) and entry.get("required") for entry in mappings.values()
        ):
            warning_messages.append(
                f"Source '{name}' has no required fields; every post counts as valid"
            )

    if config_dict.get("include_default_sources") is False and not sources:
        warning_messages.append("include_default_sources is false and no sources are configured")

    normalization = config_dict.get("normalization") or {}
    if isinstance(normalization, dict):
        threshold = normalization.get("fuzzy_threshold")
        if isinstance(threshold, (int, float)) and threshold < 0.6:
            warning_messages.append(
                f"Low fuzzy_threshold ({threshold}) will map unrelated answers to canonical values"
            )
        min_length = normalization.get("min_substring_length")
        if isinstance(min_length, int) and min_length < 3:
            warning_messages.append(
                f"min_substring_length {min_length} lets very short phrases match inside longer answers"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message through the warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
