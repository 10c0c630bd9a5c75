from __future__ import annotations

"""
Build Configuration Validation Service.

Gatekeeper for the build engine: merges the caller's configuration with the
defaults, coerces field types and normalizes domain values (ignore rules,
responsive widths, public prefix) before any file is touched.
"""

import logging
import re
from typing import Any, Dict, List, Tuple

from assettree.domain.config import get_default_config

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a build configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing them.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
        a list of warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on a malformed pattern or width.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = ["assets_path", "items_path", "output_path", "published_root"]

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["responsive_image_media_queries"] = _as_str(
        merged.get("responsive_image_media_queries"), "",
        "responsive_image_media_queries", warnings, strict,
    )
    merged["bundle_stylesheets"] = _as_bool(
        merged.get("bundle_stylesheets"), defaults["bundle_stylesheets"],
        "bundle_stylesheets", warnings, strict,
    )
    merged["ignore_patterns"] = _normalize_patterns(
        _as_list_str(merged.get("ignore_patterns"), [], "ignore_patterns", warnings, strict),
        warnings, strict,
    )
    merged["responsive_image_widths"] = _as_list_width(
        merged.get("responsive_image_widths"), defaults["responsive_image_widths"],
        "responsive_image_widths", warnings, strict,
    )

    root = merged["published_root"].strip("/")
    merged["published_root"] = root or defaults["published_root"]

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of non-empty strings."""
    if value is None:
        return list(fallback)

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str) and item.strip():
                out.append(item.strip())
            else:
                msg = f"Invalid item in '{field}[{i}]': expected non-empty str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_list_width(value: Any, fallback: List[int], field: str, warnings: List[str], strict: bool) -> List[int]:
    """Ensure input is a list of positive pixel widths, CSV strings accepted."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        value = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")

    if not isinstance(value, list):
        msg = f"Invalid field '{field}': expected list[int], received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return list(fallback)

    out: List[int] = []
    for i, item in enumerate(value):
        width = None
        if isinstance(item, int) and not isinstance(item, bool):
            width = item
        elif isinstance(item, str) and item.isdigit() and not strict:
            width = int(item)

        if width is None or width <= 0:
            msg = f"Invalid item in '{field}[{i}]': expected positive int, received {item!r}."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Item discarded.")
            continue
        out.append(width)
    return out


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_patterns(patterns: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Drop ignore rules that are not valid regular expressions."""
    out: List[str] = []
    for p in patterns:
        try:
            re.compile(p)
        except re.error as e:
            msg = f"Invalid ignore pattern '{p}': {e}."
            if strict:
                raise ValueError(msg) from e
            warnings.append(f"{msg} Pattern discarded.")
            continue
        out.append(p)
    return out
