"""Remote sample sources and the per-node fan-out."""

from .base import SampleSource
from .fanout import CollectionResult, collect_all
from .file_source import FileSource
from .openshift import NODE_SCRIPT, OcDebugSource, require_command

__all__ = [
    "SampleSource",
    "OcDebugSource",
    "FileSource",
    "CollectionResult",
    "collect_all",
    "require_command",
    "NODE_SCRIPT",
]
