"""Headless processing stages of the census report.

- ``income``: income label parsing, threshold reconciliation and aggregation.
- ``summaries``: TableBuilder extract loading and the simple group-by summaries.
- ``report``: Markdown tables, narrative templating and HTML output.
"""
