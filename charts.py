import numpy as np
import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

BAR_COLOR = "#4c72b0"


def _save(fig, path) -> None:
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def bar_chart(table: pd.DataFrame, label_col: str, path, title: str,
              horizontal: bool = False, top_n=None) -> None:
    data = table.head(top_n) if top_n else table
    labels = data[label_col].astype(str)
    counts = data["count"]

    if horizontal:
        fig, ax = plt.subplots(figsize=(8, max(3, len(data) * 0.35)))
        ax.barh(labels[::-1], counts[::-1], color=BAR_COLOR)
        ax.set_xlabel("Publications")
    else:
        fig, ax = plt.subplots(figsize=(max(6, len(data) * 0.5), 5))
        ax.bar(labels, counts, color=BAR_COLOR)
        ax.set_ylabel("Publications")
        ax.tick_params(axis="x", labelrotation=45)
    ax.set_title(title)
    _save(fig, path)


def year_chart(per_year: pd.DataFrame, path) -> None:
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.bar(per_year["year"], per_year["count"], color=BAR_COLOR)
    ax.set_xticks(per_year["year"])
    ax.tick_params(axis="x", labelrotation=90)
    ax.set_xlabel("Year")
    ax.set_ylabel("Publications")
    ax.set_title("Meta-analyses per year")
    _save(fig, path)


def plot_heatmap(df: pd.DataFrame, path, title: str, label: str = "Publications") -> None:
    df_sorted = (df.assign(max_val=df.max(axis=1, skipna=True))
                   .sort_values("max_val", ascending=False)
                   .drop(columns="max_val"))

    data = df_sorted.fillna(0)
    fig, ax = plt.subplots(figsize=(max(6, len(data.columns) * 0.6), max(4, len(data) * 0.4)))
    im = ax.imshow(data.values, aspect="auto", cmap="YlGn")

    cbar = fig.colorbar(im, ax=ax)
    cbar.set_label(label, fontsize=12)
    cbar.ax.tick_params(labelsize=10)

    ax.set_xticks(np.arange(len(data.columns)))
    ax.set_xticklabels(data.columns, fontsize=10, rotation=90)
    ax.set_yticks(np.arange(len(data.index)))
    ax.set_yticklabels(data.index, fontsize=10)

    # "–" marks year/value combinations with no publication
    for i in range(len(data.index)):
        for j in range(len(data.columns)):
            val = df_sorted.iloc[i, j]
            txt = "–" if pd.isna(val) else f"{int(val)}"
            ax.text(j, i, txt, ha="center", va="center", fontsize=8)

    ax.set_title(title)
    _save(fig, path)


def degree_histogram(centrality: pd.DataFrame, path) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    max_degree = int(centrality["degree"].max()) if len(centrality) else 0
    ax.hist(centrality["degree"], bins=np.arange(0, max_degree + 2) - 0.5,
            color=BAR_COLOR, edgecolor="black")
    ax.set_xlabel("Degree")
    ax.set_ylabel("Authors")
    ax.set_title("Co-authorship degree distribution")
    _save(fig, path)
