"""
Node Registry - the single source of node identity for one analysis run
"""

from typing import Dict, Iterator, List, Optional
import logging

from .models import ModuleNode

logger = logging.getLogger(__name__)


class NodeRegistry:
    """Maps a normalized path to exactly one shared ModuleNode"""

    def __init__(self):
        self._nodes: Dict[str, ModuleNode] = {}

    def get_or_create(self, path: str) -> ModuleNode:
        """Return the node for `path`, creating it with empty deps on first sight"""
        node = self._nodes.get(path)
        if node is None:
            node = ModuleNode(path=path)
            self._nodes[path] = node
            logger.debug(f"Registered module {path}")
        return node

    def get(self, path: str) -> Optional[ModuleNode]:
        return self._nodes.get(path)

    def paths(self) -> List[str]:
        return list(self._nodes)

    def __contains__(self, path: str) -> bool:
        return path in self._nodes

    def __iter__(self) -> Iterator[ModuleNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)
