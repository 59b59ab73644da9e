"""Census extract loading and the simple report summaries.

Re-exports the loaders for the four TableBuilder extracts and the
group-by-sum-percentage summaries built on them.
"""

from .data_loader import (
    load_abs_table,
    load_age_sex_table,
    load_dwelling_size_table,
    load_education_table,
    load_income_table,
)
from .grouping import (
    median_bracket,
    modal_label,
    summarise_age_by_sex,
    summarise_dwelling_size,
    summarise_education,
)

__all__ = [
    "load_abs_table",
    "load_age_sex_table",
    "load_dwelling_size_table",
    "load_education_table",
    "load_income_table",
    "median_bracket",
    "modal_label",
    "summarise_age_by_sex",
    "summarise_dwelling_size",
    "summarise_education",
]
