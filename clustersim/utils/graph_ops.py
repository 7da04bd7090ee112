
import pickle
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Union

import networkx as nx

from clustersim.similarity.errors import InvalidInput
from clustersim.similarity.partition import as_labels

Communities = Union[Mapping[Hashable, Iterable[Any]], Iterable[Iterable[Any]]]


def load_graph(path: str) -> nx.Graph:
    with open(path, 'rb') as f:
        G = pickle.load(f)
    return G


def communities_to_partition(communities: Communities, nodelist: List[Any]) -> List[Hashable]:
    """
    Converts a community structure into a partition aligned to `nodelist`.

    Args:
        communities: Either a dict {cluster_id: nodes} (ids become labels) or
            a list of node sets as returned by networkx (labelled 1..k).
        nodelist: Node order of the resulting partition.

    Returns:
        List of labels, one per node of `nodelist`.
    """
    if isinstance(communities, Mapping):
        items = list(communities.items())
    else:
        items = [(i, nodes) for i, nodes in enumerate(communities, 1)]

    node_to_label: Dict[Any, Hashable] = {}
    for label, nodes in items:
        for node in nodes:
            if node in node_to_label:
                raise InvalidInput(f"Node {node!r} belongs to clusters {node_to_label[node]!r} and {label!r}.")
            node_to_label[node] = label

    missing = [node for node in nodelist if node not in node_to_label]
    if missing:
        raise InvalidInput(f"{len(missing)} nodes are not covered by any cluster. First 5: {missing[:5]}")

    return [node_to_label[node] for node in nodelist]


def partition_to_communities(partition: Iterable[Hashable], nodelist: List[Any]) -> Dict[Hashable, List[Any]]:
    """Inverse of communities_to_partition: {label: [nodes]} in first-seen label order."""
    labels = as_labels(partition)
    if len(labels) != len(nodelist):
        raise InvalidInput(f"Partition has {len(labels)} labels but nodelist has {len(nodelist)} nodes.")

    cluster_dict: Dict[Hashable, List[Any]] = {}
    for node, label in zip(nodelist, labels):
        cluster_dict.setdefault(label, []).append(node)
    return cluster_dict


def partition_from_attribute(G: nx.Graph, attr: str, nodelist: Optional[List[Any]] = None) -> List[Hashable]:
    """Reads a ground-truth partition from a node attribute (e.g. 'club' in the karate club graph)."""
    nodes = list(G.nodes()) if nodelist is None else nodelist
    values = nx.get_node_attributes(G, attr)

    missing = [n for n in nodes if n not in values]
    if missing:
        raise InvalidInput(f"Attribute '{attr}' is missing on {len(missing)} nodes. First 5: {missing[:5]}")
    return [values[n] for n in nodes]
