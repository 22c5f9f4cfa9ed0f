from math import comb

import numpy as np
import pandas as pd

from coauthor_network import (
    all_authors,
    build_graph,
    coauthor_edges,
    coauthor_pairs,
    long_form,
    write_gephi_csv,
)


def _authors(*rows) -> pd.DataFrame:
    width = max(len(r) for r in rows)
    data = {"code": [f"MA{i:02d}" for i in range(1, len(rows) + 1)]}
    for slot in range(width):
        data[f"author_{slot + 1}"] = [r[slot] if slot < len(r) else np.nan for r in rows]
    return pd.DataFrame(data)


def test_two_paper_example() -> None:
    table = _authors(["Smith", "Jones", "Lee"], ["Lee", "Kim"])

    edges = coauthor_edges(table)
    graph = build_graph(edges, all_authors(table))

    pairs = {frozenset(p) for p in zip(edges["from"], edges["to"])}
    assert pairs == {
        frozenset({"Smith", "Jones"}),
        frozenset({"Smith", "Lee"}),
        frozenset({"Jones", "Lee"}),
        frozenset({"Lee", "Kim"}),
    }
    assert graph.vcount() == 4
    assert graph.ecount() == 4
    assert graph.vs.find(name="Lee").degree() == 3


def test_each_row_contributes_k_choose_2_pairs() -> None:
    rows = [list("ABCDE"), ["F", "G"], ["H", "I", "J"]]
    edges = coauthor_edges(_authors(*rows))

    for code, row in zip(["MA01", "MA02", "MA03"], rows):
        assert (edges["code"] == code).sum() == comb(len(row), 2)
    assert len(edges) == sum(comb(len(r), 2) for r in rows)


def test_rows_with_zero_or_one_author_add_no_edges(author_lists) -> None:
    edges = coauthor_edges(author_lists)

    assert set(edges["code"]) == {"MA01", "MA02"}
    assert coauthor_pairs(["Solo"]) == []
    assert coauthor_pairs([]) == []


def test_node_count_matches_distinct_authors(author_lists) -> None:
    graph = build_graph(coauthor_edges(author_lists), all_authors(author_lists))

    assert sorted(graph.vs["name"]) == ["Jones", "Kim", "Lee", "Smith", "Solo"]
    assert graph.vs.find(name="Solo").degree() == 0


def test_degree_matches_edge_list() -> None:
    table = _authors(["A", "B", "C"], ["A", "B"], ["C", "D"], ["B", "D", "E", "F"])
    edges = coauthor_edges(table)
    graph = build_graph(edges, all_authors(table))

    incident = pd.concat([edges["from"], edges["to"]]).value_counts()
    for v in graph.vs:
        assert v.degree() == incident.get(v["name"], 0)


def test_repeated_pairs_are_kept() -> None:
    edges = coauthor_edges(_authors(["A", "B"], ["B", "A"]))
    graph = build_graph(edges)

    assert len(edges) == 2
    assert graph.ecount() == 2
    assert graph.vcount() == 2


def test_repeated_name_in_one_row_is_not_a_self_pair() -> None:
    edges = coauthor_edges(_authors(["A", "B", "A"]))

    assert list(zip(edges["from"], edges["to"])) == [("A", "B")]


def test_long_form_has_endpoint_names_and_communities() -> None:
    edges = coauthor_edges(_authors(["Smith", "Jones"]))
    graph = build_graph(edges)

    df = long_form(graph, membership={"Smith": 0, "Jones": 0})

    assert list(df.columns) == ["from", "to", "from_name", "to_name", "code", "from_community", "to_community"]
    assert df.loc[0, "from_name"] == "Smith"
    assert df.loc[0, "to_name"] == "Jones"
    assert df.loc[0, "code"] == "MA01"


def test_gephi_edges_weight_counts_shared_papers(tmp_path) -> None:
    graph = build_graph(coauthor_edges(_authors(["A", "B"], ["B", "A"], ["A", "C"])))
    nodes_path = tmp_path / "nodes.csv"
    edges_path = tmp_path / "edges.csv"

    write_gephi_csv(graph, nodes_path, edges_path, membership={"A": 0, "B": 0, "C": 1})

    nodes = pd.read_csv(nodes_path)
    gephi = pd.read_csv(edges_path)
    assert list(nodes.columns) == ["Id", "Label", "Type", "Community"]
    assert len(nodes) == 3
    weights = {(s, t): w for s, t, w in zip(gephi["Source"], gephi["Target"], gephi["Weight"])}
    assert weights == {("A", "B"): 2, ("A", "C"): 1}
