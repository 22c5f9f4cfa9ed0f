import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def author_lists() -> pd.DataFrame:
    return pd.DataFrame({
        "code": ["MA01", "MA02", "MA03", "MA04"],
        "author_1": ["Smith", "Lee", "Solo", np.nan],
        "author_2": ["Jones", "Kim", np.nan, np.nan],
        "author_3": ["Lee", np.nan, np.nan, np.nan],
    })


@pytest.fixture
def publications() -> pd.DataFrame:
    return pd.DataFrame({
        "code": ["MA01", "MA02", "MA03", "MA04"],
        "year": pd.array([2015, 2018, 2018, 2020], dtype="Int64"),
        "article_type": ["Research", "Research", "Review", pd.NA],
        "journal": ["Phytopathology", "Plant Disease", "Phytopathology", "Phytopathology"],
        "n_authors": pd.array([3, 2, 1, pd.NA], dtype="Int64"),
        "systematic_review": ["yes", "no", "Yes", pd.NA],
        "effect_size": ["lnRR; Hedges g", "lnRR", pd.NA, "Odds ratio, lnRR"],
        "response_variable": ["disease severity", "yield loss; disease incidence", pd.NA, "yield"],
        "software": ["R", "R; SAS", "SAS", pd.NA],
    })
