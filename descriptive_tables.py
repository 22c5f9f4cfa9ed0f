from __future__ import annotations

from typing import Dict, Iterable

import pandas as pd

from load_sheets import author_slot_columns, row_authors, split_values
from settings import CATEGORY_COLUMNS, FLAG_COLUMNS, MULTI_VALUE_COLUMNS, YEAR_COLUMN

YES_VALUES = {"yes", "y", "true", "1", "x"}
NO_VALUES = {"no", "n", "false", "0"}


def _sorted_counts(counts: pd.Series, column: str) -> pd.DataFrame:
    df = counts.rename("count").rename_axis(column).reset_index()
    return df.sort_values(["count", column], ascending=[False, True]).reset_index(drop=True)


def count_by(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """Publications per value of a single-valued column."""
    return _sorted_counts(df[column].dropna().value_counts(), column)


def count_multi(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """Publications per value of a column holding several values per cell."""
    exploded = df[column].map(split_values).explode().dropna()
    return _sorted_counts(exploded.value_counts(), column)


def publications_per_year(df: pd.DataFrame) -> pd.DataFrame:
    years = df[YEAR_COLUMN].dropna().astype(int)
    if years.empty:
        return pd.DataFrame(columns=[YEAR_COLUMN, "count"])
    counts = years.value_counts().reindex(range(years.min(), years.max() + 1), fill_value=0)
    return counts.rename("count").rename_axis(YEAR_COLUMN).reset_index()


def _flag(value) -> str:
    if pd.isna(value):
        return "missing"
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return "yes"
    if text in NO_VALUES:
        return "no"
    return "other"


def flag_summary(df: pd.DataFrame, columns: Iterable[str] = FLAG_COLUMNS) -> pd.DataFrame:
    """yes/no/other/missing counts for each review or methodology flag."""
    rows = []
    for col in columns:
        if col not in df.columns:
            continue
        counts = df[col].map(_flag).value_counts()
        rows.append({"flag": col, **{k: int(counts.get(k, 0)) for k in ("yes", "no", "other", "missing")}})
    return pd.DataFrame(rows, columns=["flag", "yes", "no", "other", "missing"])


def author_tally(author_lists: pd.DataFrame) -> pd.DataFrame:
    """Number of publications per author."""
    slots = author_slot_columns(author_lists)
    names = [name for _, row in author_lists.iterrows() for name in row_authors(row, slots)]
    return _sorted_counts(pd.Series(names, dtype=object).value_counts(), "author")


def by_year(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """Year x value matrix of publication counts for a multi-valued column."""
    long = (
        df[[YEAR_COLUMN, column]]
        .assign(value=df[column].map(split_values))
        .explode("value")
        .dropna(subset=[YEAR_COLUMN, "value"])
    )
    matrix = (
        long
        .groupby(["value", YEAR_COLUMN])
        .size()
        .unstack(YEAR_COLUMN)
    )
    matrix.columns = [int(c) for c in matrix.columns]
    return matrix.rename_axis(column)


def summary_tables(publications: pd.DataFrame, author_lists: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    tables: Dict[str, pd.DataFrame] = {}
    if YEAR_COLUMN in publications.columns:
        tables["year"] = publications_per_year(publications)
    for col in CATEGORY_COLUMNS:
        if col in publications.columns:
            tables[col] = count_by(publications, col)
    if "n_authors" in publications.columns:
        tables["n_authors"] = (
            count_by(publications, "n_authors")
            .sort_values("n_authors")
            .reset_index(drop=True)
        )
    for col in MULTI_VALUE_COLUMNS:
        if col in publications.columns:
            tables[col] = count_multi(publications, col)
    flags = flag_summary(publications)
    if not flags.empty:
        tables["flags"] = flags
    tables["authors"] = author_tally(author_lists)
    return tables


if __name__ == "__main__":
    from load_sheets import load_author_lists, load_publications

    tables = summary_tables(load_publications(), load_author_lists())
    for name, table in tables.items():
        print(f"\n=== {name.upper()} ===")
        print(table.head(10).to_string(index=False))
