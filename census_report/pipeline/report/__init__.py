"""Report rendering pipeline.

Formats the computed census summaries as Markdown tables, fills the
narrative template, converts the result to HTML and writes the static page.
All logic lives in the submodules; this initialiser only gathers the public
API.

Usage
-----
>>> from census_report.pipeline.report import run_from_config
>>> run_from_config(output_file=Path("site/index.html"))  # doctest: +SKIP
True
"""

from .renderer import (
    clean_html_output,
    generate_final_html,
    markdown_to_html,
    write_html_output,
    write_no_data_html,
)
from .runner import (
    ReportSections,
    build_report,
    build_report_context,
    compute_sections,
    render_report,
    run_from_config,
)
from .tables import dataframe_to_markdown, format_count, format_percentage
from .templating import (
    extract_placeholders_from_template,
    load_template_and_placeholders,
    render_template,
)

__all__ = [
    "ReportSections",
    "build_report",
    "build_report_context",
    "clean_html_output",
    "compute_sections",
    "dataframe_to_markdown",
    "extract_placeholders_from_template",
    "format_count",
    "format_percentage",
    "generate_final_html",
    "load_template_and_placeholders",
    "markdown_to_html",
    "render_report",
    "render_template",
    "run_from_config",
    "write_html_output",
    "write_no_data_html",
]
