from pathlib import Path

import pytest

from charts import bar_chart, degree_histogram, plot_heatmap, year_chart
from coauthor_network import all_authors, build_graph, coauthor_edges
from descriptive_tables import by_year, count_by, publications_per_year
from network_metrics import centrality_table, detect_communities
from network_view import render_network_html
from wordclouds import render_wordcloud, term_frequencies, value_frequencies

PNG_MAGIC = b"\x89PNG"


def test_charts_are_written_as_png(tmp_path: Path, publications, author_lists) -> None:
    graph = build_graph(coauthor_edges(author_lists), all_authors(author_lists))
    targets = {
        "journal": tmp_path / "journal.png",
        "year": tmp_path / "year.png",
        "heatmap": tmp_path / "heatmap.png",
        "degree": tmp_path / "degree.png",
    }

    bar_chart(count_by(publications, "journal"), "journal", targets["journal"], "Journals", horizontal=True)
    year_chart(publications_per_year(publications), targets["year"])
    plot_heatmap(by_year(publications, "effect_size"), targets["heatmap"], "Effect sizes")
    degree_histogram(centrality_table(graph), targets["degree"])

    for path in targets.values():
        assert path.read_bytes().startswith(PNG_MAGIC)


def test_term_frequencies_drop_stop_words() -> None:
    freqs = term_frequencies(["disease severity", "yield loss and disease incidence", None])

    assert freqs["disease"] == 2
    assert freqs["yield"] == 1
    assert "and" not in freqs


def test_term_frequencies_of_nothing() -> None:
    assert term_frequencies([]) == {}


def test_value_frequencies_keep_whole_values(publications) -> None:
    freqs = value_frequencies(publications, "effect_size")

    assert freqs == {"lnrr": 3, "hedges g": 1, "odds ratio": 1}


def test_render_wordcloud(tmp_path: Path) -> None:
    path = tmp_path / "cloud.png"

    render_wordcloud({"severity": 5, "yield": 3, "incidence": 1}, path, "Response variables")

    assert path.read_bytes().startswith(PNG_MAGIC)


def test_render_wordcloud_needs_terms(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        render_wordcloud({}, tmp_path / "cloud.png")


def test_network_pages(tmp_path: Path, author_lists) -> None:
    graph = build_graph(coauthor_edges(author_lists), all_authors(author_lists))
    communities = detect_communities(graph)
    plain = tmp_path / "network.html"
    grouped = tmp_path / "communities.html"

    render_network_html(graph, plain)
    render_network_html(graph, grouped, sizes={"Lee": 2.0}, groups=communities.walktrap)

    for path in (plain, grouped):
        html = path.read_text(encoding="utf-8")
        assert "Smith" in html
        assert "Solo" in html
    assert '"group": ' in grouped.read_text(encoding="utf-8")


def test_node_tooltips_use_html_line_breaks(tmp_path: Path, author_lists) -> None:
    graph = build_graph(coauthor_edges(author_lists), all_authors(author_lists))
    path = tmp_path / "communities.html"

    render_network_html(graph, path, groups=detect_communities(graph).walktrap)

    html = path.read_text(encoding="utf-8")
    # pyvis may escape the markup when embedding node data as JSON
    assert "<br>community:" in html or "\\u003cbr\\u003ecommunity:" in html
    assert "\\ncommunity:" not in html
