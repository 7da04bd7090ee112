import networkx as nx
import numpy as np
import pytest


@pytest.fixture
def reference():
    """Two clusters of two nodes: {0,1} and {2,3}."""
    return [1, 1, 2, 2]


@pytest.fixture
def candidate():
    """One cluster of three nodes and a singleton: {0,1,2} and {3}."""
    return [1, 1, 1, 2]


@pytest.fixture
def reused_candidate():
    """Reference with two singletons that both fall into the same candidate cluster."""
    return [1, 2, 3, 3], [1, 1, 2, 2]


@pytest.fixture
def karate():
    return nx.karate_club_graph()


@pytest.fixture
def rng():
    return np.random.default_rng(42)
