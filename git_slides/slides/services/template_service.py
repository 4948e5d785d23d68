"""Substitute ``{{name}}`` placeholders into slide templates."""

import re
from collections.abc import Mapping

STANDALONE_PLACEHOLDER_RE = re.compile(r"^[ \t]*\{\{(\w+)\}\}[ \t]*$")
INLINE_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")
BLANK_RUN_RE = re.compile(r"\n{3,}")


def render_template(template: str, variables: Mapping[str, str | None]) -> str:
    """
    Render a template with variables.

    A line holding nothing but one placeholder becomes the trimmed value, or
    a blank line when the value is missing or empty. Other placeholders are
    replaced inline with the raw value. Substituted text is never scanned
    again, so values may contain ``{{...}}`` literally. Runs of blank lines
    collapse to one and the result is trimmed. Unknown names render empty.

    Args:
        template: Template text
        variables: Placeholder values

    Returns:
        Rendered text
    """

    def inline_value(match: re.Match[str]) -> str:
        return variables.get(match.group(1)) or ""

    rendered: list[str] = []
    for line in template.split("\n"):
        standalone = STANDALONE_PLACEHOLDER_RE.match(line)
        if standalone:
            rendered.append((variables.get(standalone.group(1)) or "").strip())
        else:
            rendered.append(INLINE_PLACEHOLDER_RE.sub(inline_value, line))

    result = BLANK_RUN_RE.sub("\n\n", "\n".join(rendered))
    return result.strip()
