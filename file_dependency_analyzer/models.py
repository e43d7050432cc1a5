"""
Data model shared by the registry, the assembler and the cycle detector
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Union

if TYPE_CHECKING:
    from .registry import NodeRegistry


class CircularMode(str, Enum):
    """How much context around a detected cycle is kept in the report"""
    FULL = 'full'
    PRE = 'pre'
    CIRCULAR = 'circular'

    @classmethod
    def coerce(cls, value) -> 'CircularMode':
        """Map any value onto a mode; unknown values fall back to CIRCULAR"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.CIRCULAR


@dataclass(frozen=True)
class Edge:
    """An observed relationship: `issuer` depends on `path`"""
    path: str
    issuer: str

    @property
    def is_entry(self) -> bool:
        return self.path == self.issuer


@dataclass(eq=False)
class ModuleNode:
    """A module in the graph. Nodes are shared, so equality is identity."""
    path: str
    deps: List['ModuleNode'] = field(default_factory=list)

    def __repr__(self) -> str:
        # deps can reach this node again, so never recurse here
        return f"ModuleNode(path={self.path!r}, deps={len(self.deps)})"


@dataclass
class DependencyGraph:
    """The designated root plus the registry owning every node of the run"""
    root: Optional[ModuleNode]
    registry: 'NodeRegistry'

    @property
    def has_root(self) -> bool:
        return self.root is not None

    def nodes(self) -> Iterator[ModuleNode]:
        return iter(self.registry)

    def __len__(self) -> int:
        return len(self.registry)


CircularPath = List[str]
ReportPayload = Union[CircularPath, ModuleNode, None]
