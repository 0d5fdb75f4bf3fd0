import argparse
import logging
import warnings

import pandas as pd

from benchmarking import BenchmarkRunner, networkx_edmonds_karp, networkx_preflow_push, plot_times, \
    residual_edmonds_karp
from flow_algorithms.edmonds_karp import max_flow
from flow_algorithms.errors import FlowNetworkError, NotSaturated
from flow_algorithms.min_cut import min_cut
from flow_algorithms.network_util import read_edge_list
from flow_algorithms.residual_network import build_network
from graph_generators.barabasi_albert import generate_ba
from graph_generators.erdos_renyi import generate_er
from graph_generators.textbook import TEXTBOOK_NODE_NAMES, TEXTBOOK_SINK, TEXTBOOK_SOURCE, textbook_network

RNG_SEED = 42

# Graph sizes (n) for the benchmark
N_VALUES = [20, 40, 60, 80, 100]

# this is for each (model, n) pair
R_TRIALS = 30

MODEL_PARAMS = {
    'ER': {'p': 0.1},  # directed G(n, p)
    'BA': {'m': 3},    # m new edges per node, both directions
}


def format_flows(network, names) -> str:
    lines = ["Printing flows through all the edges that sum up to the maximum flow."]
    for (u, v), f in network.flows().items():
        lines.append(f"Flow through {names[u]}->{names[v]}: {f}")
    return "\n".join(lines)


def format_cut(cut, names) -> str:
    if not cut.saturated:
        return "The residual graph still has one or more augmenting paths. Failed to compute minimum s-t cut."
    s_side = " ".join(names[v] for v in sorted(cut.source_side))
    t_side = " ".join(names[v] for v in sorted(cut.sink_side))
    cut_edges = ", ".join(f"{names[u]}->{names[v]}" for u, v in cut.cut_edges)
    return (f"Minimum s-t cut (capacity {cut.capacity})\n"
            f"Nodes at the s side:\n{s_side}\n"
            f"Nodes at the t side:\n{t_side}\n"
            f"Cut edges: {cut_edges}")


def solve(args):
    if args.edges:
        node_count, edges, names = read_edge_list(args.edges)
        network = build_network(node_count, edges)
        source = args.source if args.source is not None else 0
        sink = args.sink if args.sink is not None else node_count - 1
    else:
        network = textbook_network()
        names = dict(enumerate(TEXTBOOK_NODE_NAMES))
        source = args.source if args.source is not None else TEXTBOOK_SOURCE
        sink = args.sink if args.sink is not None else TEXTBOOK_SINK

    flow = max_flow(network, source, sink)
    print(f"Max flow found after running Ford Fulkerson algorithm: {flow}")
    print(format_flows(network, names))

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NotSaturated)
        cut = min_cut(network, source, sink)
    print()
    print(format_cut(cut, names))


def benchmark(args):
    algorithms_to_test = {
        'residual_edmonds_karp': residual_edmonds_karp,
        'networkx_edmonds_karp': networkx_edmonds_karp,
        'networkx_preflow_push': networkx_preflow_push,
    }

    graph_generators = {
        'ER': generate_er,
        'BA': generate_ba,
    }

    runner = BenchmarkRunner(algorithms_to_test, graph_generators,
                             reference='networkx_preflow_push', seed=args.seed)
    results_df = runner.run(
        models=list(graph_generators),
        n_values=args.n_values,
        trials=args.trials,
        model_params=MODEL_PARAMS,
    )

    pd.set_option('display.width', 1000)
    pd.set_option('display.max_rows', None)

    print("\nBenchmark Results:")
    print(results_df)

    results_df.to_csv(args.output, index=False)
    print(f"\nResults saved to {args.output}")

    if args.plot:
        plot_times(results_df, args.plot)
        print(f"Plot saved to {args.plot}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Edmonds-Karp max flow / min cut")

    parser.add_argument("--edges", type=str, default=None,
                        help="File with 'u v capacity' lines; defaults to the built-in six node example")
    parser.add_argument("--source", type=int, default=None,
                        help="Source node id (after relabelling to 0..n-1)")
    parser.add_argument("--sink", type=int, default=None,
                        help="Sink node id (after relabelling to 0..n-1)")

    parser.add_argument("--benchmark", action="store_true",
                        help="Run the random graph benchmark instead")
    parser.add_argument("--trials", type=int, default=R_TRIALS,
                        help="Number of trials per (model, n) pair")
    parser.add_argument("--n-values", type=int, nargs="+", default=N_VALUES,
                        help="Graph sizes to benchmark")
    parser.add_argument("--seed", type=int, default=RNG_SEED)
    parser.add_argument("--output", type=str, default="benchmark_results.csv",
                        help="CSV file for benchmark results")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a running time plot to this file")

    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.benchmark:
        benchmark(args)
        return 0

    try:
        solve(args)
    except FlowNetworkError as e:
        parser.exit(2, f"error: {e}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
