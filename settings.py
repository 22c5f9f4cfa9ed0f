import os
from pathlib import Path

# Published workbook (URL or local path) with two sheets: papers and authors.
SPREADSHEET_URL = os.environ.get("META_BIB_SPREADSHEET")
PUBLICATIONS_SHEET = os.environ.get("META_BIB_PAPERS_SHEET", "papers")
AUTHORS_SHEET = os.environ.get("META_BIB_AUTHORS_SHEET", "authors")

OUTPUT_DIR = Path(os.environ.get("META_BIB_OUTPUT_DIR", "output"))

CODE_COLUMN = "code"
YEAR_COLUMN = "year"
AUTHOR_SLOT_PREFIX = "author"

CATEGORY_COLUMNS = ("article_type", "journal", "data_source")
FLAG_COLUMNS = (
    "systematic_review",
    "heterogeneity",
    "publication_bias",
    "sensitivity_analysis",
)
MULTI_VALUE_COLUMNS = (
    "response_variable",
    "effect_size",
    "estimator",
    "approach",
    "model",
    "software",
)
MULTI_VALUE_SEPARATOR = r"[;,]"

WALKTRAP_STEPS = 4
RANDOM_SEED = 42
TOP_N = 20
