"""
Command-line front end for binary-lifting LCA queries

Builds an ancestor table from an edge-list file and answers query pairs.

Usage:
    python lca_cli.py --mode query --edges tree.txt --pair 3 4 --pair 5 6
    python lca_cli.py --mode stats --edges tree.txt --root 2
    python lca_cli.py --mode demo
"""

import argparse
import logging
import os
import sys
from typing import Dict, List, Optional, Tuple

import yaml

from binary_lifting import AncestorTable, AncestorTableBuilder
from lca_errors import LCAError
from tree_input import TreeInput, from_edges, read_edge_list

logger = logging.getLogger(__name__)


# 7-vertex sample tree used by --mode demo
#
#          0
#        /   \
#       1     2
#      / \   / \
#     3   4 5   6
DEMO_EDGES = [(0, 1), (0, 2), (1, 3), (1, 4), (2, 5), (2, 6)]
DEMO_PAIRS = [(3, 4), (5, 6), (3, 5), (1, 2), (4, 1), (6, 6)]


def default_config() -> Dict:
    """Default configuration."""
    return {
        'tree': {
            'root': 0,
        },
        'logging': {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
        'query': {
            'show_depth': True,
            'show_path_length': True,
        },
    }


def load_config(config_path: str = "config.yaml") -> Dict:
    """
    Load configuration, merging the file's sections over the defaults.

    A missing file is not an error; the defaults are used instead.
    """
    config = default_config()

    if not os.path.exists(config_path):
        logger.warning(f"No config file found at {config_path}, using defaults")
        return config

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values

    logger.info(f"Loaded config from {config_path}")
    return config


class LCAQueryRunner:
    """
    Builds one ancestor table and answers queries against it.
    """

    def __init__(self, config: Optional[Dict] = None):
        self.config = config if config is not None else default_config()
        self.table: Optional[AncestorTable] = None

    def build(self, tree: TreeInput, root: Optional[int] = None) -> AncestorTable:
        """Build the ancestor table, rooting at the configured root unless given."""
        if root is None:
            root = self.config['tree']['root']
        logger.info(f"Building ancestor table for {tree.vertex_count()} vertices, root {root}")
        self.table = AncestorTableBuilder().build(tree, root)
        return self.table

    def build_from_file(self, edges_path: str, root: Optional[int] = None) -> AncestorTable:
        if not os.path.exists(edges_path):
            raise FileNotFoundError(f"Edge file not found: {edges_path}")
        return self.build(read_edge_list(edges_path), root)

    def query(self, pairs: List[Tuple[int, int]]) -> List[str]:
        """
        Answer each (u, v) pair and format one result line per pair.

        Args:
            pairs: Vertex pairs to resolve

        Returns:
            Formatted result lines
        """
        if self.table is None:
            raise ValueError("Ancestor table not built. Run build first.")

        show_depth = self.config['query'].get('show_depth', True)
        show_path = self.config['query'].get('show_path_length', True)

        lines = []
        for u, v in pairs:
            w = self.table.query(u, v)
            line = f"lca({u}, {v}) = {w}"
            if show_depth:
                line += f" | depth {self.table.get_depth(w)}"
            if show_path:
                line += f" | path length {self.table.path_length(u, v)}"
            lines.append(line)
        return lines

    def stats_lines(self) -> List[str]:
        if self.table is None:
            raise ValueError("Ancestor table not built. Run build first.")
        stats = self.table.stats()
        return [
            f"Vertices:  {stats['num_nodes']}",
            f"Root:      {stats['root']}",
            f"Levels:    {stats['levels']}",
            f"Max Depth: {stats['max_depth']}",
            f"Avg Depth: {stats['avg_depth']:.2f}",
        ]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Lowest common ancestor queries via binary lifting')
    parser.add_argument('--mode', choices=['query', 'stats', 'demo'], required=True,
                        help='Mode: answer query pairs, print table statistics, or run demo')
    parser.add_argument('--edges', type=str,
                        help='Edge-list file, one "u v" pair per line (query and stats modes)')
    parser.add_argument('--root', type=int, default=None,
                        help='Root vertex (overrides config tree.root)')
    parser.add_argument('--pair', type=int, nargs=2, action='append', metavar=('U', 'V'),
                        default=[], help='Vertex pair to resolve (repeatable)')
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to YAML config')

    args = parser.parse_args(argv)
    if args.mode in ('query', 'stats') and not args.edges:
        parser.error(f"--edges required for {args.mode} mode")
    if args.mode == 'query' and not args.pair:
        parser.error("--pair required for query mode")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid config {args.config}: {e}")
        return 1

    logging.basicConfig(
        level=getattr(logging, str(config['logging']['level']).upper(), logging.INFO),
        format=config['logging']['format'],
    )

    runner = LCAQueryRunner(config)

    try:
        if args.mode == 'demo':
            print("Running Demo...")
            print("=" * 70)
            runner.build(from_edges(DEMO_EDGES), root=0)
            lines = runner.query(DEMO_PAIRS)
        else:
            runner.build_from_file(args.edges, args.root)
            if args.mode == 'stats':
                lines = runner.stats_lines()
            else:
                lines = runner.query([tuple(p) for p in args.pair])
    except (LCAError, ValueError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
