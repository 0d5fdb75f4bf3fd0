import logging
import time
from typing import Any, Callable, Dict, List, Optional

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import pandas as pd
from networkx.algorithms.flow import edmonds_karp as nx_edmonds_karp
from networkx.algorithms.flow import preflow_push as nx_preflow_push
from tqdm import tqdm

from flow_algorithms.edmonds_karp import max_flow
from flow_algorithms.residual_network import ResidualNetwork

logger = logging.getLogger(__name__)


def residual_edmonds_karp(matrix: np.ndarray, s: int, t: int) -> int:
    return max_flow(ResidualNetwork.from_capacity_matrix(matrix), s, t)


def _networkx_flow(flow_func):
    def run(matrix: np.ndarray, s: int, t: int) -> int:
        G = nx.from_numpy_array(matrix, create_using=nx.DiGraph, edge_attr="capacity")
        return int(nx.maximum_flow_value(G, s, t, flow_func=flow_func))
    return run


networkx_edmonds_karp = _networkx_flow(nx_edmonds_karp)
networkx_preflow_push = _networkx_flow(nx_preflow_push)


class BenchmarkRunner:
    """
    Handles running max-flow benchmarks for different graph models and algorithms.
    """

    def __init__(self,
                 algorithms: Dict[str, Callable],
                 generators: Dict[str, Callable],
                 reference: Optional[str] = None,
                 seed: Optional[int] = None):
        """
        Args:
            algorithms (Dict[str, Callable]):
                Dict of {'algo_name': algorithm_function}
                Each function must accept (capacity_matrix, source, sink)
                and return the max flow value.

            generators (Dict[str, Callable]):
                Dict of {'model_name': generator_function}
                Each function must accept n and **kwargs and return an
                (n, n) capacity matrix.

            reference (Optional[str]):
                Name of the algorithm whose value the others are checked
                against. Disagreements are counted per algorithm.

            seed (Optional[int]):
                Global random seed for reproducibility.
                If None, randomness is uncontrolled.
        """
        if reference is not None and reference not in algorithms:
            raise ValueError(f"reference algorithm '{reference}' is not in algorithms")
        self.algorithms = algorithms
        self.generators = generators
        self.reference = reference
        self.base_seed = seed

        if seed is not None:
            np.random.seed(seed)

    def run(self,
            models: List[str],
            n_values: List[int],
            trials: int,
            model_params: Dict[str, Dict[str, Any]],
            seed_per_trial: bool = True) -> pd.DataFrame:
        """
        Runs the full benchmark. Flow is always computed from node 0 to node n-1.

        Args:
            models (List[str]): List of model names (e.g., ['ER', 'BA']).
            n_values (List[int]): List of graph sizes (n).
            trials (int): Number of trials to run for each (model, n) pair.
            model_params (Dict): Parameters for each model generator.
                                 e.g., {'ER': {'p': 0.1}, 'BA': {'m': 3}}
            seed_per_trial (bool): If True, assigns a deterministic seed per trial
                                   based on (model, n, trial index).

        Returns:
            pd.DataFrame: A DataFrame with all results.
        """
        all_results = []

        for model_name in models:
            if model_name not in self.generators:
                logger.warning("Generator '%s' not found. Skipping.", model_name)
                continue
            gen_func = self.generators[model_name]
            params = model_params.get(model_name, {})

            for n in n_values:
                if n < 2:
                    logger.warning("n=%d has no distinct source and sink. Skipping.", n)
                    continue

                trial_results = {name: {'times': [], 'flows': [], 'mismatches': 0}
                                 for name in self.algorithms}

                for i in tqdm(range(trials), desc=f"{model_name} n={n}", leave=False):
                    # reseed each trial for deterministic reproducibility
                    if self.base_seed is not None and seed_per_trial:
                        trial_seed = (self.base_seed + n * 100003 + i * 7919
                                      + sum(map(ord, model_name))) % (2**32 - 1)
                        np.random.seed(trial_seed)

                    graph = gen_func(n=n, **params)
                    values = {}

                    for algo_name, algo_func in self.algorithms.items():
                        graph_copy = np.copy(graph)

                        start_time = time.perf_counter()
                        flow_val = algo_func(graph_copy, 0, n - 1)
                        end_time = time.perf_counter()

                        values[algo_name] = flow_val
                        trial_results[algo_name]['times'].append(
                            end_time - start_time)
                        trial_results[algo_name]['flows'].append(flow_val)

                    if self.reference is not None:
                        expected = values[self.reference]
                        for algo_name, value in values.items():
                            if value != expected:
                                trial_results[algo_name]['mismatches'] += 1
                                logger.error("%s gave %s, %s gave %s (model=%s, n=%d, trial=%d)",
                                             algo_name, value, self.reference, expected,
                                             model_name, n, i)

                for algo_name, data in trial_results.items():
                    all_results.append({
                        'model': model_name,
                        'n': n,
                        'algorithm': algo_name,
                        'trials': trials,
                        'mean_time_s': np.mean(data['times']),
                        'std_time_s': np.std(data['times']),
                        'mean_flow': np.mean(data['flows']),
                        'std_flow': np.std(data['flows']),
                        'min_flow': np.min(data['flows']),
                        'max_flow': np.max(data['flows']),
                        'mismatches': data['mismatches'],
                    })
                logger.info("finished model=%s n=%d", model_name, n)

        return pd.DataFrame(all_results)


def plot_times(results_df: pd.DataFrame, path: str):
    """Mean running time against n, one line per (model, algorithm)."""
    fig, ax = plt.subplots(figsize=(8, 5))
    for (model, algo), grp in results_df.groupby(['model', 'algorithm']):
        grp = grp.sort_values('n')
        ax.errorbar(grp['n'], grp['mean_time_s'], yerr=grp['std_time_s'],
                    marker='o', capsize=3, label=f"{algo} ({model})")
    ax.set_xlabel("n (nodes)")
    ax.set_ylabel("mean time (s)")
    ax.set_title("Max-flow running time")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
