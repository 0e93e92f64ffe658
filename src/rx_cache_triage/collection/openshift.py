"""Collect rx_cache_* counters from OpenShift nodes through `oc debug`.

Only read-only commands run on the node, inside `chroot /host`:
    - bonds and their slave interfaces come from /proc/net/bonding/*
    - counters come from `ethtool -S <iface>`, rx_cache_* lines only

Drivers that don't expose rx_cache_* simply print nothing.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import List, Optional

from ..exceptions import CollectionError, NodeCollectionError
from ..logging_config import get_logger
from .base import SampleSource

logger = get_logger(__name__)

# $1 optionally restricts the walk to one bond.
NODE_SCRIPT = r"""
set -euo pipefail
[ -d /proc/net/bonding ] || exit 0
only_bond="${1:-}"
for bf in /proc/net/bonding/*; do
  [ -e "$bf" ] || continue
  bond_name=$(basename "$bf")
  if [ -n "$only_bond" ] && [ "$bond_name" != "$only_bond" ]; then
    continue
  fi
  awk -F": " '/^Slave Interface:/ {print $2}' "$bf" | while read -r iface; do
    ethtool -S "$iface" 2>/dev/null | awk -v bond="$bond_name" -v iface="$iface" -F": " \
      '/^[[:space:]]*rx_cache_/ {gsub(/^[[:space:]]+/, "", $1); printf "bond=%s iface=%s metric=%s value=%s\n", bond, iface, $1, $2}' \
      || true
  done
done
"""

# Keep stderr snippets in error messages short
_MAX_STDERR_CHARS = 500


def require_command(name: str) -> str:
    """Return the full path of `name` or raise CollectionError."""
    path = shutil.which(name)
    if path is None:
        raise CollectionError(f"required command '{name}' not found in PATH", command=name)
    return path


class OcDebugSource(SampleSource):
    """Query nodes with `oc get nodes` and `oc debug node/<node>`."""

    def __init__(
        self,
        selector: Optional[str] = None,
        bond: Optional[str] = None,
        timeout_seconds: int = 120,
        oc: str = "oc",
    ) -> None:
        self.selector = selector
        self.bond = bond
        self.timeout_seconds = timeout_seconds
        self.oc = oc

    def list_nodes(self) -> List[str]:
        require_command(self.oc)
        cmd = [self.oc, "get", "nodes", "-o", "name"]
        if self.selector:
            cmd += ["-l", self.selector]

        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout_seconds
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise CollectionError(str(e), command=" ".join(cmd))

        if result.returncode != 0:
            raise CollectionError(
                result.stderr.strip()[:_MAX_STDERR_CHARS] or f"exit status {result.returncode}",
                command=" ".join(cmd),
            )

        nodes = [
            line.strip().removeprefix("node/")
            for line in result.stdout.splitlines()
            if line.strip()
        ]
        if not nodes:
            raise CollectionError("No nodes found. Are you logged into the cluster?")
        logger.info(f"Found {len(nodes)} node(s)")
        return nodes

    def debug_command(self, node: str) -> List[str]:
        cmd = [
            self.oc,
            "debug",
            f"node/{node}",
            "--quiet",
            "--",
            "chroot",
            "/host",
            "bash",
            "-lc",
            NODE_SCRIPT,
            "bash",
        ]
        if self.bond:
            cmd.append(self.bond)
        return cmd

    def collect(self, node: str) -> List[str]:
        try:
            result = subprocess.run(
                self.debug_command(node),
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            raise NodeCollectionError(node, f"timed out after {self.timeout_seconds}s")
        except FileNotFoundError as e:
            raise NodeCollectionError(node, str(e))

        if result.returncode != 0:
            reason = result.stderr.strip()[:_MAX_STDERR_CHARS] or f"exit status {result.returncode}"
            raise NodeCollectionError(node, reason)

        lines = [
            f"node={node} {line.strip()}"
            for line in result.stdout.splitlines()
            if line.strip().startswith("bond=")
        ]
        logger.debug(f"{node}: {len(lines)} counter line(s)")
        return lines
