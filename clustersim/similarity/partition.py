
from typing import Any, Dict, FrozenSet, Hashable, List, Sequence

import numpy as np
import pandas as pd

from clustersim.similarity.errors import InvalidInput
from clustersim.utils.logger import get_logger

logger = get_logger(__name__)

LABEL_ORDERS = ('sorted', 'first_seen')


def as_labels(partition: Any) -> List[Hashable]:
    """
    Normalizes a partition (list, tuple, numpy array or pandas Series) into a
    plain list of labels, one per node, in node order.
    """
    if partition is None:
        raise InvalidInput("Partition is None.")

    if isinstance(partition, pd.Series):
        labels = partition.tolist()
    elif isinstance(partition, np.ndarray):
        if partition.ndim != 1:
            raise InvalidInput(f"Partition must be one-dimensional, got shape {partition.shape}.")
        labels = partition.tolist()
    else:
        labels = list(partition)

    if len(labels) == 0:
        raise InvalidInput("Partition is empty: at least one node is required.")

    # NaN != NaN, so missing labels would each form their own cluster
    missing = pd.Series(labels, dtype=object).isna()
    if missing.any():
        positions = missing[missing].index.tolist()
        raise InvalidInput(f"Partition has {len(positions)} missing labels (None/NaN). First 5 positions: {positions[:5]}")
    return labels


def index_partition(partition: Sequence[Hashable]) -> Dict[Hashable, FrozenSet[int]]:
    """
    Groups 0-based node positions by cluster label.

    Args:
        partition: One label per node.

    Returns:
        Dict {label: frozenset of node positions}, keys in first-seen order.
        Singleton clusters are kept as one-element sets.
    """
    labels = as_labels(partition)

    groups: Dict[Hashable, List[int]] = {}
    for idx, label in enumerate(labels):
        if label not in groups:
            groups[label] = []
        groups[label].append(idx)

    logger.debug(f"Indexed {len(labels)} nodes into {len(groups)} clusters")
    return {label: frozenset(nodes) for label, nodes in groups.items()}


def ordered_labels(index: Dict[Hashable, Any], order: str = 'sorted') -> List[Hashable]:
    """Returns the cluster labels of an index in 'sorted' or 'first_seen' order."""
    if order == 'first_seen':
        return list(index.keys())
    if order == 'sorted':
        try:
            return sorted(index.keys())
        except TypeError as e:
            raise InvalidInput(f"Cluster labels are not mutually comparable, use order='first_seen': {e}") from e
    raise InvalidInput(f"Unknown label order '{order}', expected one of {LABEL_ORDERS}.")


def cluster_sizes(partition: Sequence[Hashable]) -> Dict[Hashable, int]:
    """Number of nodes per cluster label."""
    return {label: len(nodes) for label, nodes in index_partition(partition).items()}
