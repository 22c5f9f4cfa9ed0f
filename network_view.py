from collections import Counter

import igraph as ig
from pyvis.network import Network


def render_network_html(graph: ig.Graph, path, sizes=None, groups=None,
                        title: str = "Co-authorship network") -> None:
    """Interactive pyvis page of the co-authorship graph.

    sizes: author -> score used for node size (degree when omitted).
    groups: author -> community label used for node colour.
    """
    if sizes is None:
        sizes = dict(zip(graph.vs["name"], graph.degree()))

    net = Network(height="800px", width="100%", bgcolor="#ffffff", font_color="#222222",
                  heading=title, cdn_resources="remote")

    for name in graph.vs["name"]:
        score = float(sizes.get(name, 0))
        node = {"label": name, "title": f"{name}<br>score: {score:.3g}", "value": score}
        if groups is not None:
            node["group"] = int(groups[name])
            node["title"] += f"<br>community: {groups[name]}"
        net.add_node(name, **node)

    names = graph.vs["name"]
    shared = Counter(tuple(sorted((names[e.source], names[e.target]))) for e in graph.es)
    for (a1, a2), count in shared.items():
        net.add_edge(a1, a2, value=count, title=f"{count} shared paper(s)", color="#999999")

    net.force_atlas_2based()
    net.save_graph(str(path))
