from __future__ import annotations

import re
from typing import List, Sequence

import pandas as pd

from settings import (
    AUTHOR_SLOT_PREFIX,
    AUTHORS_SHEET,
    MULTI_VALUE_SEPARATOR,
    PUBLICATIONS_SHEET,
    SPREADSHEET_URL,
    YEAR_COLUMN,
)

HEADER_RGX = re.compile(r"[^0-9a-z]+")
SPACES_RGX = re.compile(r"\s+")


def normalize_header(name) -> str:
    """'Article type' -> 'article_type', 'Author 12' -> 'author_12'."""
    return HEADER_RGX.sub("_", str(name).strip().lower()).strip("_")


def _clean_text(value):
    if pd.isna(value):
        return pd.NA
    text = SPACES_RGX.sub(" ", str(value)).strip()
    return text if text else pd.NA


def require_source(source):
    if source is None or not str(source).strip():
        raise ValueError(
            "No workbook given. Set META_BIB_SPREADSHEET to the published workbook URL or a local .xlsx path."
        )
    return source


def read_workbook(source, sheet: str) -> pd.DataFrame:
    """Read one sheet from a workbook URL or path with normalized headers."""
    require_source(source)
    df = pd.read_excel(source, sheet_name=sheet, engine="openpyxl")
    df.columns = [normalize_header(c) for c in df.columns]
    return df.dropna(how="all").reset_index(drop=True)


def load_publications(source=SPREADSHEET_URL, sheet: str = PUBLICATIONS_SHEET) -> pd.DataFrame:
    df = read_workbook(source, sheet)
    for col in df.columns:
        if df[col].dtype == object or pd.api.types.is_string_dtype(df[col]):
            df[col] = df[col].map(_clean_text)
    for col in (YEAR_COLUMN, "n_authors"):
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="raise").astype("Int64")
    return df


def author_slot_columns(df: pd.DataFrame) -> List[str]:
    return [c for c in df.columns if c.startswith(AUTHOR_SLOT_PREFIX)]


def load_author_lists(source=SPREADSHEET_URL, sheet: str = AUTHORS_SHEET) -> pd.DataFrame:
    df = read_workbook(source, sheet)
    slots = author_slot_columns(df)
    if not slots:
        raise ValueError(f"Sheet '{sheet}' has no '{AUTHOR_SLOT_PREFIX}*' columns.")
    for col in slots:
        df[col] = df[col].map(_clean_text)
    return df


def row_authors(row: pd.Series, slots: Sequence[str]) -> List[str]:
    """Non-missing names of one paper in slot order, each name once."""
    names = [row[c] for c in slots if not pd.isna(row[c])]
    return list(dict.fromkeys(str(n) for n in names))


def split_values(cell) -> List[str]:
    if pd.isna(cell):
        return []
    parts = re.split(MULTI_VALUE_SEPARATOR, str(cell))
    return [p.strip() for p in parts if p.strip()]


if __name__ == "__main__":
    papers = load_publications()
    authors = load_author_lists()
    print(f"Publications: {len(papers)}, author rows: {len(authors)}")
    print(papers.head().to_string(index=False))
