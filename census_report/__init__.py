"""Census Household Report package.

Turns Australian Bureau of Statistics TableBuilder extracts (household
income, age by sex, highest educational attainment and dwelling size) into a
single static HTML report of grouped counts and percentages.

Package Structure
-----------------
- `pipeline/income/`:
    Parsing of textual income ranges, reconciliation onto fixed income
    thresholds and aggregation into display rows.
- `pipeline/summaries/`:
    Loading of the fixed-layout CSV extracts and the other report summaries.
- `pipeline/report/`:
    Markdown tables, narrative templating and HTML rendering.
- `config.py`: All configuration constants (paths, layouts, thresholds), as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.
- `generate_report.py`: Command line entry point.

Examples
--------
>>> from census_report.pipeline.report import run_from_config
>>> run_from_config()  # doctest: +SKIP
True
"""
