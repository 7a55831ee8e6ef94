"""Configuration constants for dcmview."""

import os
from dataclasses import dataclass

from dcmview.errors import ConfigurationError

# Values with a longer text form are cut in labels.
VALUE_DISPLAY_LIMIT: int = 150

# Marker appended to a cut value.
ELLIPSIS: str = "..."

# Single-character queries match almost everything while typing.
MIN_SEARCH_LENGTH: int = 2

# A tag shows up in the "differing values" view only with at least this many values.
MIN_DISTINCT_VALUES: int = 2

# Rows moved by page up/down when the screen height is unknown.
DEFAULT_PAGE_SIZE: int = 20

# Value representation of nested sequences, never rendered inline.
SEQUENCE_VR: str = "SQ"

ENV_VALUE_DISPLAY_LIMIT = "DCMVIEW_VALUE_DISPLAY_LIMIT"
ENV_MIN_SEARCH_LENGTH = "DCMVIEW_MIN_SEARCH_LENGTH"


@dataclass(frozen=True)
class Settings:
    """Tunables shared by the tree builder, the search and the browser."""

    value_display_limit: int = VALUE_DISPLAY_LIMIT
    min_search_length: int = MIN_SEARCH_LENGTH
    page_size: int = DEFAULT_PAGE_SIZE


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from None
    if value < 1:
        msg = f"{name} must be positive, got {value}"
        raise ConfigurationError(msg)
    return value


def load_settings(
    *,
    value_display_limit: int | None = None,
    min_search_length: int | None = None,
) -> Settings:
    """Build settings from the environment, explicit arguments win."""
    return Settings(
        value_display_limit=value_display_limit
        or _positive_int(ENV_VALUE_DISPLAY_LIMIT, VALUE_DISPLAY_LIMIT),
        min_search_length=min_search_length
        or _positive_int(ENV_MIN_SEARCH_LENGTH, MIN_SEARCH_LENGTH),
    )
