"""Fan out collection across nodes, fan in all lines.

One task per node on a bounded thread pool. Nodes are independent, so
completion order doesn't matter; the core sorts everything afterwards. A
node that fails contributes no lines and is recorded in failed_nodes.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..exceptions import NodeCollectionError
from ..logging_config import get_logger
from .base import SampleSource

logger = get_logger(__name__)

# Default worker count: CPU count, capped at 8 to keep the API server calm
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass
class CollectionResult:
    """Fanned-in output of one collection pass."""

    lines: List[str] = field(default_factory=list)
    nodes: List[str] = field(default_factory=list)
    failed_nodes: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> List[str]:
        return [n for n in self.nodes if n not in self.failed_nodes]


def collect_all(
    source: SampleSource,
    nodes: Optional[Sequence[str]] = None,
    max_workers: Optional[int] = None,
) -> CollectionResult:
    """Collect raw lines from every node.

    Args:
        source: Where the lines come from
        nodes: Nodes to query (default: source.list_nodes())
        max_workers: Pool size (default: CPU count, max 8)

    Returns:
        CollectionResult with lines ordered by node name
    """
    node_list = sorted(set(nodes if nodes is not None else source.list_nodes()))
    result = CollectionResult(nodes=node_list)
    if not node_list:
        return result

    per_node: Dict[str, List[str]] = {}
    workers = min(max_workers or _DEFAULT_WORKERS, len(node_list))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(source.collect, node): node for node in node_list}
        for future in as_completed(futures):
            node = futures[future]
            try:
                per_node[node] = future.result()
            except NodeCollectionError as e:
                logger.warning(f"Skipping node {node}: {e.reason}")
                result.failed_nodes[node] = e.reason
            except Exception as e:
                logger.warning(f"Skipping node {node}: {type(e).__name__}: {e}")
                result.failed_nodes[node] = f"{type(e).__name__}: {e}"

    for node in node_list:
        result.lines.extend(per_node.get(node, []))

    logger.info(
        f"Collected {len(result.lines)} line(s) from "
        f"{len(node_list) - len(result.failed_nodes)}/{len(node_list)} node(s)"
    )
    return result
