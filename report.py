"""Run every reporting step over the meta-analysis workbook and save the artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import pandas as pd

from charts import bar_chart, degree_histogram, plot_heatmap, year_chart
from coauthor_network import all_authors, build_graph, coauthor_edges, long_form, write_gephi_csv
from descriptive_tables import by_year, summary_tables
from load_sheets import load_author_lists, load_publications, require_source, split_values
from network_metrics import centrality_table, community_table, detect_communities, graph_statistics
from network_view import render_network_html
from settings import OUTPUT_DIR, RANDOM_SEED, SPREADSHEET_URL, TOP_N
from wordclouds import render_wordcloud, term_frequencies, value_frequencies

BAR_CHARTS = {
    "journal": ("Publications per journal", True),
    "article_type": ("Article type", False),
    "data_source": ("Data source", False),
    "software": ("Software", True),
    "effect_size": ("Effect-size type", True),
    "estimator": ("Estimator", True),
}


def _log(message: str) -> None:
    print(f"[report] {message}")


def run_report(source=SPREADSHEET_URL, output_dir=OUTPUT_DIR, seed: int = RANDOM_SEED) -> Dict[str, Path]:
    require_source(source)
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    artifacts: Dict[str, Path] = {}

    def saved(key: str, filename: str) -> Path:
        path = out / filename
        artifacts[key] = path
        return path

    # 1. Load both sheets
    _log(f"Loading workbook {source}")
    papers = load_publications(source)
    author_lists = load_author_lists(source)
    _log(f"{len(papers)} publications, {len(author_lists)} author rows")

    # 2. Summary tables
    tables = summary_tables(papers, author_lists)
    with pd.ExcelWriter(saved("summary_tables", "summary_tables.xlsx"), engine="openpyxl") as writer:
        for name, table in tables.items():
            table.to_excel(writer, sheet_name=name[:31], index=False)
    tables["authors"].to_csv(saved("author_tally", "author_tally.csv"), index=False)
    if "effect_size" in tables:
        tables["effect_size"].to_csv(saved("effect_size_tally", "effect_size_tally.csv"), index=False)

    # 3. Charts
    if "year" in tables:
        year_chart(tables["year"], saved("year_chart", "publications_per_year.png"))
    for col, (title, horizontal) in BAR_CHARTS.items():
        if col in tables and not tables[col].empty:
            bar_chart(tables[col], col, saved(f"{col}_chart", f"{col}.png"), title,
                      horizontal=horizontal, top_n=TOP_N)
    if not tables["authors"].empty:
        bar_chart(tables["authors"], "author", saved("authors_chart", "top_authors.png"),
                  f"Top {TOP_N} authors", horizontal=True, top_n=TOP_N)
    if {"year", "effect_size"} <= set(papers.columns):
        matrix = by_year(papers, "effect_size")
        if not matrix.empty:
            plot_heatmap(matrix, saved("effect_size_heatmap", "effect_size_by_year.png"),
                         "Effect-size types per year")

    # 4. Word clouds
    if "response_variable" in papers.columns:
        texts = papers["response_variable"].map(lambda c: " ".join(split_values(c)))
        freqs = term_frequencies(texts)
        if freqs:
            render_wordcloud(freqs, saved("response_wordcloud", "response_variable_wordcloud.png"),
                             "Response variables")
    if "effect_size" in papers.columns:
        freqs = value_frequencies(papers, "effect_size")
        if freqs:
            render_wordcloud(freqs, saved("effect_size_wordcloud", "effect_size_wordcloud.png"),
                             "Effect-size types")

    # 5. Co-authorship network
    edges = coauthor_edges(author_lists)
    graph = build_graph(edges, all_authors(author_lists))
    _log(f"Co-authorship graph: {graph.vcount()} authors, {graph.ecount()} edges")
    edges.to_csv(saved("edges", "network_edges.csv"), index=False)

    centrality = centrality_table(graph)
    centrality.to_csv(saved("centrality", "centrality.csv"), index=False)
    degree_histogram(centrality, saved("degree_histogram", "degree_histogram.png"))
    stats = graph_statistics(graph)
    pd.DataFrame([stats]).to_csv(saved("graph_statistics", "graph_statistics.csv"), index=False)

    communities = detect_communities(graph, seed=seed)
    _log(f"Walktrap: {communities.sizes['walktrap']} communities, modularity {communities.modularity:.4f}")
    community_table(communities).to_csv(saved("communities", "communities.csv"), index=False)
    long_form(graph, communities.walktrap).to_csv(saved("long_form", "network_long.csv"), index=False)
    write_gephi_csv(graph, saved("gephi_nodes", "gephi_nodes.csv"), saved("gephi_edges", "gephi_edges.csv"),
                    membership=communities.walktrap)

    # 6. Interactive views
    render_network_html(graph, saved("network_html", "coauthor_network.html"))
    betweenness = dict(zip(centrality["author"], centrality["betweenness"]))
    render_network_html(graph, saved("communities_html", "coauthor_communities.html"),
                        sizes=betweenness, groups=communities.walktrap,
                        title="Co-authorship communities (walktrap)")

    for path in artifacts.values():
        _log(f"Saved: {path}")
    return artifacts


if __name__ == "__main__":
    run_report()
