from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from sklearn.feature_extraction.text import CountVectorizer  # noqa: E402
from wordcloud import WordCloud  # noqa: E402

from load_sheets import split_values  # noqa: E402

# ─────────────────────────── Term counts ───────────────────────────

def term_frequencies(texts: Iterable[str], stop_words="english") -> Dict[str, int]:
    """Word counts over free-text cells, English stop words removed."""
    docs = [str(t) for t in texts if not pd.isna(t) and str(t).strip()]
    if not docs:
        return {}
    vectorizer = CountVectorizer(token_pattern=r"(?u)\b[a-zA-Z][\w\-]+\b", stop_words=stop_words)
    X = vectorizer.fit_transform(docs)
    totals = X.sum(axis=0).A1
    terms = vectorizer.get_feature_names_out()
    return {term: int(n) for term, n in zip(terms, totals)}


def value_frequencies(df: pd.DataFrame, column: str) -> Dict[str, int]:
    """Counts of whole category values, e.g. 'log response ratio'."""
    counter: Counter = Counter()
    for cell in df[column]:
        counter.update(v.lower() for v in split_values(cell))
    return dict(counter)


# ─────────────────────────── Rendering ───────────────────────────

def render_wordcloud(frequencies: Dict[str, int], path, title: str = "") -> None:
    if not frequencies:
        raise ValueError("No terms to draw.")
    cloud = WordCloud(
        width=1200, height=800,
        background_color="white",
        max_words=200,
        colormap="viridis",
        relative_scaling=0.5,
        min_font_size=10,
        random_state=0,
    ).generate_from_frequencies(frequencies)

    fig, ax = plt.subplots(figsize=(12, 8))
    ax.imshow(cloud, interpolation="bilinear")
    ax.axis("off")
    if title:
        ax.set_title(title, fontsize=16)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)


if __name__ == "__main__":
    from load_sheets import load_publications
    from settings import OUTPUT_DIR

    papers = load_publications()
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    freqs = term_frequencies(papers["response_variable"].map(lambda c: " ".join(split_values(c))))
    for w, c in Counter(freqs).most_common(8):
        print(f"  {w:<20} {c}")
    render_wordcloud(freqs, OUTPUT_DIR / "response_variable_wordcloud.png", "Response variables")
