import os
import sys
import pickle
import logging
import argparse
import warnings

import pandas as pd

# Ensure the package root is in python path
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.abspath(os.path.join(current_dir, '..'))
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from clustersim.utils.logger import get_logger, setup_logging
from clustersim.utils.functions import LoadConfig
from clustersim.utils.graph_ops import communities_to_partition
from clustersim.similarity.compare import best_candidate, compare_partitions, format_report, rank_candidates

warnings.filterwarnings("ignore")
logger = get_logger("CompareScript")

def parse_args():
    parser = argparse.ArgumentParser(description='Compare saved clusterings against a ground truth')
    parser.add_argument('--config_path', type=str, default='config/run.yaml', help='Path to the run configuration file')
    parser.add_argument('--reference_path', type=str, default=None, help='Ground-truth clustering (.pkl or .csv)')
    parser.add_argument('--savepath', type=str, default=None, help='Directory to save the ranking')
    parser.add_argument('--method', type=str, default=None, choices=['greedy', 'bipartite'], help='Cluster matching policy')
    parser.add_argument('--logpath', type=str, default=None, help='Path to save logs (optional)')
    return parser.parse_args()

def load_clusters(path, node_col='node_id', cluster_col='cluster'):
    """
    Reads a clustering as {cluster_id: [nodes]}.
    Accepts the pickles written by the clustering runners (optionally wrapped
    under a 'clusters' key) or a CSV with node and cluster columns.
    """
    if path.endswith('.csv'):
        df = pd.read_csv(path)
        return df.groupby(cluster_col)[node_col].apply(list).to_dict()

    with open(path, 'rb') as f:
        data = pickle.load(f)
    if isinstance(data, dict) and 'clusters' in data:
        data = data['clusters']
    return data

def main(args):
    config = LoadConfig(args)
    setup_logging(log_file=config.logpath, level=logging.INFO, force=True)

    logger.info("============================")
    logger.info("Comparing clusterings")
    logger.info("============================")

    reference_clusters = load_clusters(config.reference_path, config.node_col, config.cluster_col)
    nodelist = sorted({node for nodes in reference_clusters.values() for node in nodes}, key=str)
    reference = communities_to_partition(reference_clusters, nodelist)
    logger.info(f"Reference: {len(reference_clusters)} clusters over {len(nodelist)} nodes")

    candidates = {}
    for name, path in config.candidate_paths.items():
        clusters = load_clusters(path, config.node_col, config.cluster_col)
        candidates[name] = communities_to_partition(clusters, nodelist)
        result = compare_partitions(reference, candidates[name], config.reference_name, name,
                                    method=config.method, order=config.order)
        logger.info("\n" + format_report(result, reference, candidates[name]))

    ranking = rank_candidates(reference, candidates, config.reference_name,
                              method=config.method, order=config.order, verbose=True)
    logger.info("\n" + ranking.round(4).to_string())
    logger.info(f"Best: {best_candidate(ranking)}")

    if config.savepath:
        os.makedirs(config.savepath, exist_ok=True)
        ranking.to_csv(os.path.join(config.savepath, 'ranking.csv'))

if __name__ == '__main__':
    args = parse_args()
    main(args)
