
SEED = 42

detection_params = {
    'louvain': {
        'resolution': 1.0,  # > 1 favors smaller communities, < 1 larger ones
        'threshold': 1e-7,  # modularity gain below which a level stops
        'weight': 'weight', # edge attribute, ignored if absent
        'seed': SEED
        },
    'greedy_modularity': {
        'resolution': 1.0,
        'weight': None,
        },
    'label_propagation': {},  # semi-synchronous, deterministic
    'asyn_lpa': {
        'weight': None,
        'seed': SEED
        },
    'girvan_newman': {
        'level': 1,  # number of splits taken from the dendrogram (1 = first split)
        },
    'kernighan_lin': {
        'max_iter': 10,
        'weight': 'weight',
        'seed': SEED
        },
}
