from collections import defaultdict
from itertools import combinations
from pathlib import Path

import igraph as ig
import pandas as pd

from load_sheets import author_slot_columns, load_author_lists, row_authors
from settings import CODE_COLUMN, OUTPUT_DIR

EDGES_CSV = "network_edges.csv"
LONG_CSV = "network_long.csv"
NODES_GEPHI_CSV = "gephi_nodes.csv"
EDGES_GEPHI_CSV = "gephi_edges.csv"


def coauthor_pairs(authors):
    """Every unordered pair of distinct authors of one paper."""
    return list(combinations(authors, 2))


def coauthor_edges(author_lists: pd.DataFrame) -> pd.DataFrame:
    """Edge list of the co-authorship graph, one row per pair per paper.

    Pairs repeated across papers are kept, so the multiplicity of a pair is
    the number of papers the two authors share.
    """
    slots = author_slot_columns(author_lists)
    rows = []
    for r_i, row in author_lists.iterrows():
        code = row[CODE_COLUMN] if CODE_COLUMN in author_lists.columns else r_i
        for a1, a2 in coauthor_pairs(row_authors(row, slots)):
            rows.append({"from": a1, "to": a2, "code": code})
    return pd.DataFrame(rows, columns=["from", "to", "code"])


def all_authors(author_lists: pd.DataFrame):
    """Distinct author names in order of first appearance."""
    slots = author_slot_columns(author_lists)
    seen = {}
    for _, row in author_lists.iterrows():
        for name in row_authors(row, slots):
            seen.setdefault(name, None)
    return list(seen)


def build_graph(edges: pd.DataFrame, authors=None) -> ig.Graph:
    """Undirected co-authorship multigraph keyed by author name.

    Authors with no co-author in the table are added as isolated vertices.
    """
    names = list(authors) if authors is not None else []
    known = set(names)
    for name in pd.concat([edges["from"], edges["to"]]):
        if name not in known:
            known.add(name)
            names.append(name)

    g = ig.Graph(directed=False)
    g.add_vertices(names)
    g.add_edges(list(zip(edges["from"], edges["to"])))
    if "code" in edges.columns and len(edges):
        g.es["code"] = edges["code"].tolist()
    return g


def long_form(graph: ig.Graph, membership=None) -> pd.DataFrame:
    """One row per edge with both endpoint ids and names."""
    rows = []
    for e in graph.es:
        u, v = e.tuple
        rec = {
            "from": u,
            "to": v,
            "from_name": graph.vs[u]["name"],
            "to_name": graph.vs[v]["name"],
        }
        if "code" in graph.es.attributes():
            rec["code"] = e["code"]
        if membership is not None:
            rec["from_community"] = membership[graph.vs[u]["name"]]
            rec["to_community"] = membership[graph.vs[v]["name"]]
        rows.append(rec)
    return pd.DataFrame(rows)


def write_gephi_csv(graph: ig.Graph, nodes_path, edges_path, membership=None) -> None:
    """Gephi node and edge tables; edge weight is the number of shared papers."""
    # (author1, author2) -> count
    pair_counts = defaultdict(int)
    for e in graph.es:
        u, v = e.tuple
        key = tuple(sorted([graph.vs[u]["name"], graph.vs[v]["name"]]))
        pair_counts[key] += 1

    nodes = []
    for name in graph.vs["name"]:
        node = {"Id": name, "Label": name, "Type": "Author"}
        if membership is not None:
            node["Community"] = membership[name]
        nodes.append(node)

    edges = []
    for (a1, a2), count in pair_counts.items():
        edges.append({
            "Source": a1,
            "Target": a2,
            "Type": "Undirected",
            "Label": "coauthor",
            "Weight": count
        })

    pd.DataFrame(nodes).to_csv(nodes_path, index=False)
    pd.DataFrame(edges, columns=["Source", "Target", "Type", "Label", "Weight"]).to_csv(edges_path, index=False)


if __name__ == "__main__":
    out = Path(OUTPUT_DIR)
    out.mkdir(parents=True, exist_ok=True)

    author_lists = load_author_lists()
    edges = coauthor_edges(author_lists)
    graph = build_graph(edges, all_authors(author_lists))

    edges.to_csv(out / EDGES_CSV, index=False)
    long_form(graph).to_csv(out / LONG_CSV, index=False)
    write_gephi_csv(graph, out / NODES_GEPHI_CSV, out / EDGES_GEPHI_CSV)
    print(f"Authors: {graph.vcount()}, co-authorship edges: {graph.ecount()}")
    print(f"Files saved: {out / EDGES_CSV}, {out / LONG_CSV}, {out / NODES_GEPHI_CSV}, {out / EDGES_GEPHI_CSV}")
