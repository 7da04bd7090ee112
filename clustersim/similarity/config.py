
similarity_params = {
    'reference_name': 'GT',  # Prefix for ground-truth cluster ids, e.g. "GT.3"
    'method': 'greedy',  # 'greedy' (per-row best match, candidates reusable) or 'bipartite' (one-to-one)
    'order': 'sorted',  # Row/column order of the similarity matrix: 'sorted' or 'first_seen'
    'with_external': True,  # Also report NMI / ARI (scikit-learn) in rankings
}
