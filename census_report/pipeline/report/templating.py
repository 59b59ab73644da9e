"""Templating utilities for the report narrative.

Handles template file loading, placeholder extraction and context-driven
rendering of the Markdown prose that introduces each report section.
Nothing here writes to disk or interprets Markdown; rendering is
deterministic given its inputs.

Examples
--------
>>> render_template("Total: {TotalPersons}", {"TotalPersons": "1,024"})
'Total: 1,024'
"""

import re
from pathlib import Path

from census_report.config import MISSING_DATA_PLACEHOLDER

_PLACEHOLDER = re.compile(r"\{([a-zA-Z0-9_]+)\}")


def load_template(path: Path) -> str:
    r"""Read the contents of a template file as a string.

    Parameters
    ----------
    path : Path
        Path to the template file to be loaded.

    Returns
    -------
    str
        Contents of the template file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    OSError
        If the file cannot be read.
    """
    with path.open("r", encoding="utf-8") as fh:
        return fh.read()


def extract_placeholders_from_template(content: str) -> list[str]:
    """Return a sorted list of unique placeholders found in the template.

    Placeholders are tokens of the form ``{Name}`` where the name can
    contain letters, digits or underscores.
    """
    return sorted(set(_PLACEHOLDER.findall(content)))


def render_template(template_content: str, context: dict[str, str]) -> str:
    """Replace every ``{Name}`` placeholder with its value from ``context``.

    Missing keys are rendered as ``MISSING_DATA_PLACEHOLDER``.

    Parameters
    ----------
    template_content : str
        The template text containing ``{Placeholders}``.
    context : dict[str, str]
        Mapping from placeholder names to their string values.

    Returns
    -------
    str
        The rendered template.
    """

    def replace_func(match: re.Match[str]) -> str:
        return context.get(match.group(1), MISSING_DATA_PLACEHOLDER)

    return _PLACEHOLDER.sub(replace_func, template_content)


def load_template_and_placeholders(path: Path) -> tuple[str, list[str]]:
    """Load a template and return its content along with found placeholders.

    Raises
    ------
    ValueError
        If no placeholders are found in the template.
    """
    content = load_template(path)
    placeholders = extract_placeholders_from_template(content)
    if not placeholders:
        raise ValueError(f"No placeholders found in template {path}")
    return content, placeholders
