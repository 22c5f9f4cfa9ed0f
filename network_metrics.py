"""Centrality, graph-level statistics and community detection on the co-authorship graph."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List

import igraph as ig
import pandas as pd

from settings import RANDOM_SEED, WALKTRAP_STEPS

# igraph draws from Python's random module from here on, for every graph in the process.
ig.set_random_number_generator(random)

CENTRALITY_COLUMNS = ["author", "degree", "closeness", "betweenness", "eigenvector", "pagerank", "authority"]
EIGEN_ATTEMPTS = 10


@dataclass(slots=True)
class CommunityResult:
    """Node-name -> community label for each detection method."""

    walktrap: Dict[str, int]
    edge_betweenness: Dict[str, int]
    leading_eigenvector: Dict[str, int]
    modularity: float
    sizes: Dict[str, int] = field(default_factory=dict)


def _names(graph: ig.Graph) -> List[str]:
    # A graph built with no vertices has no name attribute at all.
    return graph.vs["name"] if "name" in graph.vs.attributes() else []


def centrality_table(graph: ig.Graph) -> pd.DataFrame:
    """Per-author centrality scores, most connected first."""
    if graph.vcount() == 0:
        return pd.DataFrame(columns=CENTRALITY_COLUMNS)
    df = pd.DataFrame({
        "author": _names(graph),
        "degree": graph.degree(),
        "closeness": graph.closeness(),
        "betweenness": graph.betweenness(directed=False),
        "eigenvector": graph.eigenvector_centrality(),
        "pagerank": graph.pagerank(directed=False),
        "authority": graph.authority_score(),
    })
    return df.sort_values(["degree", "author"], ascending=[False, True]).reset_index(drop=True)


def graph_statistics(graph: ig.Graph) -> Dict[str, float]:
    # Reciprocity is always 1 on an undirected graph; reported for completeness.
    return {
        "nodes": graph.vcount(),
        "edges": graph.ecount(),
        "diameter": graph.diameter(directed=False),
        "mean_distance": graph.average_path_length(directed=False),
        "density": graph.density(),
        "reciprocity": graph.reciprocity(),
        "transitivity": graph.transitivity_undirected(),
    }


def _labels(graph: ig.Graph, membership) -> Dict[str, int]:
    return dict(zip(_names(graph), membership))


def _leading_eigenvector(graph: ig.Graph, seed: int) -> ig.VertexClustering:
    """ARPACK fails to converge from some random start vectors; move on to the next seed."""
    for attempt in range(EIGEN_ATTEMPTS):
        random.seed(seed + attempt)
        try:
            return graph.community_leading_eigenvector()
        except ig.InternalError:
            if attempt == EIGEN_ATTEMPTS - 1:
                raise


def detect_communities(graph: ig.Graph, seed: int = RANDOM_SEED,
                       steps: int = WALKTRAP_STEPS) -> CommunityResult:
    """Walktrap, edge-betweenness and leading-eigenvector partitions.

    Dendrogram methods are cut at the level of maximum modularity. The seed
    is applied to igraph's random number generator before each method. A
    graph without edges puts every author in a community of their own, with
    modularity 0.
    """
    if graph.ecount() == 0:
        singletons = list(range(graph.vcount()))
        labels = _labels(graph, singletons)
        return CommunityResult(
            walktrap=labels,
            edge_betweenness=dict(labels),
            leading_eigenvector=dict(labels),
            modularity=0.0,
            sizes={
                "walktrap": len(singletons),
                "edge_betweenness": len(singletons),
                "leading_eigenvector": len(singletons),
            },
        )

    random.seed(seed)
    walktrap = graph.community_walktrap(steps=steps).as_clustering()

    random.seed(seed)
    betweenness = graph.community_edge_betweenness(directed=False).as_clustering()

    eigen = _leading_eigenvector(graph, seed)

    return CommunityResult(
        walktrap=_labels(graph, walktrap.membership),
        edge_betweenness=_labels(graph, betweenness.membership),
        leading_eigenvector=_labels(graph, eigen.membership),
        modularity=graph.modularity(walktrap.membership),
        sizes={
            "walktrap": len(walktrap),
            "edge_betweenness": len(betweenness),
            "leading_eigenvector": len(eigen),
        },
    )


def community_table(result: CommunityResult) -> pd.DataFrame:
    return pd.DataFrame({
        "author": list(result.walktrap),
        "walktrap": list(result.walktrap.values()),
        "edge_betweenness": [result.edge_betweenness[a] for a in result.walktrap],
        "leading_eigenvector": [result.leading_eigenvector[a] for a in result.walktrap],
    })


if __name__ == "__main__":
    from coauthor_network import all_authors, build_graph, coauthor_edges
    from load_sheets import load_author_lists

    author_lists = load_author_lists()
    graph = build_graph(coauthor_edges(author_lists), all_authors(author_lists))

    print(centrality_table(graph).head(10).to_string(index=False))
    for key, value in graph_statistics(graph).items():
        print(f"  {key:<15} {value}")
    communities = detect_communities(graph)
    print(f"Walktrap communities: {communities.sizes['walktrap']}, modularity {communities.modularity:.4f}")
