
import itertools
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Set

import networkx as nx
from networkx.algorithms import community as nx_comm
from tqdm.auto import tqdm

from clustersim.models.Detection.config import detection_params
from clustersim.similarity.errors import InvalidInput
from clustersim.utils.graph_ops import communities_to_partition
from clustersim.utils.logger import get_logger

logger = get_logger(__name__)

Detector = Callable[..., Iterable[Set[Any]]]


def _girvan_newman(G: nx.Graph, level: int = 1) -> Iterable[Set[Any]]:
    """Communities after `level` splits of the Girvan-Newman dendrogram."""
    if level < 1:
        raise InvalidInput(f"girvan_newman level must be >= 1, got {level}")
    if G.number_of_edges() == 0:
        return [{n} for n in G.nodes()]

    communities = None
    for communities in itertools.islice(nx_comm.girvan_newman(G), level):
        pass
    return communities


def _kernighan_lin(G: nx.Graph, **params) -> Iterable[Set[Any]]:
    return nx_comm.kernighan_lin_bisection(G, **params)


DETECTORS: Dict[str, Detector] = {
    'louvain': nx_comm.louvain_communities,
    'greedy_modularity': nx_comm.greedy_modularity_communities,
    'label_propagation': nx_comm.label_propagation_communities,
    'asyn_lpa': nx_comm.asyn_lpa_communities,
    'girvan_newman': _girvan_newman,
    'kernighan_lin': _kernighan_lin,
}


def run_detection(
    G: nx.Graph,
    name: str,
    params: Optional[Dict[str, Any]] = None,
    nodelist: Optional[List[Any]] = None
) -> List[Hashable]:
    """
    Runs one registered community detection algorithm and returns its partition.

    Args:
        G: Input graph.
        name: Key of DETECTORS.
        params: Keyword arguments for the algorithm, defaults to detection_params[name].
        nodelist: Node order of the returned partition, defaults to G.nodes().

    Returns:
        List of cluster labels (1..k), one per node of `nodelist`.
    """
    if name not in DETECTORS:
        raise InvalidInput(f"Unknown detection algorithm '{name}', expected one of {list(DETECTORS)}.")

    kwargs = dict(detection_params.get(name, {}) if params is None else params)
    nodes = list(G.nodes()) if nodelist is None else nodelist

    communities = [set(c) for c in DETECTORS[name](G, **kwargs)]
    logger.debug(f"{name}: {len(communities)} communities on {G.number_of_nodes()} nodes")
    return communities_to_partition(communities, nodes)


def run_all(G: nx.Graph, names: Iterable[str], nodelist: Optional[List[Any]] = None, verbose: bool = False) -> Dict[str, List[Hashable]]:
    """Runs several detectors, keyed by algorithm name, in the given order."""
    nodes = list(G.nodes()) if nodelist is None else nodelist
    return {
        name: run_detection(G, name, nodelist=nodes)
        for name in tqdm(list(names), desc="Detection", disable=not verbose)
    }
