"""
parser.py — Edge-List Ingestion
================================
Turns raw edge-list text into node ids and weighted edges.

Format, one edge per line:

    A B 4
    A D 2

Exactly three whitespace-separated tokens per line: two node ids and an
integer weight.  Anything else (blank lines, wrong token count, weights
that aren't integers) is dropped here so the engines never see it.
"""

import logging
from typing import List, Tuple

from graph.edge import Edge

logger = logging.getLogger(__name__)


def parse_edge_list(text: str, directed: bool = False) -> Tuple[List[str], List[Edge]]:
    """
    Returns:
        (node_ids, edges): node ids in first-seen order, edges in line order.
    """
    node_ids: List[str] = []
    seen = set()
    edges: List[Edge] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        parts = line.split()
        if len(parts) != 3:
            logger.debug("Skipping line %d: expected 3 tokens, got %d", lineno, len(parts))
            continue

        source, target, weight_str = parts
        try:
            weight = int(weight_str)
        except ValueError:
            logger.debug("Skipping line %d: weight %r is not an integer", lineno, weight_str)
            continue

        for nid in (source, target):
            if nid not in seen:
                seen.add(nid)
                node_ids.append(nid)
        edges.append(Edge(source=source, target=target, weight=weight, directed=directed))

    return node_ids, edges
