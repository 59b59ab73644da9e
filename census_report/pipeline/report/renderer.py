"""Rendering utilities for the static census report.

Turns the assembled Markdown body (narrative plus summary tables) into
HTML with markdown2, tidies the result and injects it into the page
template. Also owns the file output helpers.

System Boundaries
-----------------
- Accepts already computed Markdown; knows nothing about census data.
- Page template and fallback pages come from ``census_report.config``.
- Write failures propagate as ``OSError`` to the runner.

Example
-------
>>> from census_report.pipeline.report import renderer
>>> html = renderer.markdown_to_html("# Income")
>>> html
'<h1>Income</h1>'
"""

import logging
import re
from pathlib import Path

import markdown2

from census_report.config import NO_DATA_HTML

logger = logging.getLogger(__name__)

MARKDOWN_EXTRAS: list[str] = ["tables"]


def clean_html_output(html_content: str) -> str:
    r"""Perform lightweight normalisation and cleaning of generated HTML strings.

    Removes empty paragraphs, redundant breaks and whitespace between tags.

    Parameters
    ----------
    html_content : str
        Raw HTML string.

    Returns
    -------
    str
        Cleaned HTML string.

    Raises
    ------
    TypeError
        If input is not str.

    Examples
    --------
    >>> clean_html_output("<p></p><h1>Hi</h1><p>&nbsp;</p><br><br>")
    '<h1>Hi</h1><br>'
    """
    if not isinstance(html_content, str):
        raise TypeError("Input must be a string.")
    html_content = re.sub(r"<p>\s*</p>", "", html_content)
    html_content = re.sub(r"<p>&nbsp;</p>", "", html_content)
    html_content = re.sub(r"<p><br\s*/?>\s*</p>", "", html_content)
    html_content = re.sub(r"(<br\s*/?>\s*){2,}", "<br>", html_content)
    html_content = re.sub(r"\n\s*\n\s*\n+", "\n\n", html_content)
    html_content = re.sub(r">\s+<", "><", html_content)
    return html_content.strip()


def markdown_to_html(markdown_text: str) -> str:
    """Convert report Markdown (with pipe tables) to cleaned HTML."""
    html = str(markdown2.markdown(markdown_text, extras=MARKDOWN_EXTRAS))
    return clean_html_output(html)


def generate_final_html(body_html: str, title: str, template_path: Path) -> str:
    r"""Inject the report body and title into the page template.

    Parameters
    ----------
    body_html : str
        Rendered report body.
    title : str
        Page and heading title.
    template_path : Path
        HTML template containing ``{report_title}`` and ``{report_body_html}``.

    Returns
    -------
    str
        Fully rendered HTML page.

    Raises
    ------
    OSError
        If the template file cannot be read.
    """
    with template_path.open("r", encoding="utf-8") as fh:
        tpl = fh.read()
    return tpl.replace("{report_title}", title).replace("{report_body_html}", body_html)


def write_html_output(html_content: str, output_file: Path) -> None:
    """Write ``html_content`` to ``output_file``, creating parent directories.

    Raises
    ------
    OSError
        If the directory cannot be created or the file cannot be written.
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(html_content, encoding="utf-8")
    logger.info("Wrote %s (%d characters)", output_file, len(html_content))


def write_no_data_html(output_file: Path) -> None:
    """Write the minimal 'no data' page to ``output_file``."""
    write_html_output(NO_DATA_HTML, output_file)
