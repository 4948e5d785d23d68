"""Factory for building slide format options from defaults and environment."""

import dataclasses
import os
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from git_slides.slides.domain.value_objects import (
    HighlightMode,
    LineChangeDisplay,
    SlideFormatOptions,
    SlideOrganization,
    SlideTitle,
)
from git_slides.slides.templates import (
    DEFAULT_COMMIT_DETAILS_TEMPLATE_PATH,
    DEFAULT_SLIDE_TEMPLATE_PATH,
    load_template,
)

ENV_PREFIX = "GIT_SLIDES_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

_ENUM_SETTINGS: dict[str, tuple[str, type[Enum]]] = {
    "SLIDE_ORGANIZATION": ("slide_organization", SlideOrganization),
    "HIGHLIGHT_MODE": ("highlight_mode", HighlightMode),
    "LINE_CHANGE_DISPLAY": ("line_change_display", LineChangeDisplay),
    "SLIDE_TITLE": ("slide_title", SlideTitle),
}

_BOOL_SETTINGS: dict[str, str] = {
    "HIGHLIGHT_ADDED_LINES": "highlight_added_lines",
    "SHOW_FULL_FILE": "show_full_file",
    "SPEAKER_NOTES": "message_body_as_speaker_notes",
}


def _load_env_file() -> None:
    """Load environment variables from .env file."""
    # Try to find .env file in project root (parent of git_slides package)
    project_root = Path(__file__).parent.parent.parent.parent
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        # Fallback: try current directory
        load_dotenv()


def create_default_format_options() -> SlideFormatOptions:
    """Create the default options with the built-in templates."""
    return SlideFormatOptions(
        commit_details_template=load_template(DEFAULT_COMMIT_DETAILS_TEMPLATE_PATH),
        slide_template=load_template(DEFAULT_SLIDE_TEMPLATE_PATH),
    )


def _env_name(setting: str) -> str:
    return f"{ENV_PREFIX}{setting}"


def _parse_enum(setting: str, raw: str, enum_type: type[Enum]) -> Enum:
    try:
        return enum_type(raw.strip().lower())
    except ValueError:
        accepted = ", ".join(member.value for member in enum_type)
        raise ValueError(
            f"Invalid {_env_name(setting)}: {raw}. Supported values: {accepted}"
        ) from None


def _parse_bool(setting: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Invalid {_env_name(setting)}: {raw}. Use one of: true, false, 1, 0, yes, no"
    )


def _parse_context_lines(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            f"Invalid {_env_name('CONTEXT_LINES')}: {raw}. Must be a non-negative integer"
        ) from None
    if value < 0:
        raise ValueError(
            f"Invalid {_env_name('CONTEXT_LINES')}: {raw}. Must be a non-negative integer"
        )
    return value


def _env_overrides() -> dict[str, Any]:
    """Read option overrides from GIT_SLIDES_* environment variables."""
    overrides: dict[str, Any] = {}

    for setting, (field_name, enum_type) in _ENUM_SETTINGS.items():
        raw = os.getenv(_env_name(setting))
        if raw:
            overrides[field_name] = _parse_enum(setting, raw, enum_type)

    for setting, field_name in _BOOL_SETTINGS.items():
        raw = os.getenv(_env_name(setting))
        if raw:
            overrides[field_name] = _parse_bool(setting, raw)

    raw_context = os.getenv(_env_name("CONTEXT_LINES"))
    if raw_context:
        overrides["context_lines"] = _parse_context_lines(raw_context)

    date_format = os.getenv(_env_name("DATE_FORMAT"))
    if date_format:
        overrides["date_format"] = date_format

    slide_template_path = os.getenv(_env_name("SLIDE_TEMPLATE_PATH"))
    if slide_template_path:
        overrides["slide_template"] = load_template(Path(slide_template_path))

    details_template_path = os.getenv(_env_name("COMMIT_DETAILS_TEMPLATE_PATH"))
    if details_template_path:
        overrides["commit_details_template"] = load_template(Path(details_template_path))

    return overrides


def load_format_options(**overrides: Any) -> SlideFormatOptions:
    """
    Build slide format options.

    Defaults are overridden by GIT_SLIDES_* environment variables (a .env
    file is loaded first), which are overridden by explicit keyword
    arguments. Keyword arguments set to None are ignored.

    Args:
        **overrides: SlideFormatOptions field values

    Returns:
        Slide format options

    Raises:
        ValueError: If an environment value or override is invalid
    """
    _load_env_file()

    options = dataclasses.replace(create_default_format_options(), **_env_overrides())

    explicit = {name: value for name, value in overrides.items() if value is not None}
    if explicit:
        options = dataclasses.replace(options, **explicit)
    return options
