"""
Formatters turning a report payload into writable text

Graphs can be thousands of modules deep, so every walk here keeps its own
frame stack instead of recursing.
"""

import json
from typing import Dict, List, Optional

from .models import ModuleNode, ReportPayload


def _circular_reference(path: str) -> ValueError:
    return ValueError(f"Circular reference detected at {path}")


def node_to_dict(node: Optional[ModuleNode]) -> Optional[Dict]:
    """Nested {"path", "deps"} structure; nodes are repeated wherever they are shared"""
    if node is None:
        return None

    result = {'path': node.path, 'deps': []}
    branch = {node.path}
    frames = [(node, result, iter(node.deps))]

    while frames:
        current, current_dict, deps = frames[-1]
        dep = next(deps, None)
        if dep is None:
            frames.pop()
            branch.discard(current.path)
            continue
        if dep.path in branch:
            raise _circular_reference(dep.path)

        child = {'path': dep.path, 'deps': []}
        current_dict['deps'].append(child)
        branch.add(dep.path)
        frames.append((dep, child, iter(dep.deps)))

    return result


def encode_node(root: ModuleNode, indent: Optional[int] = None) -> str:
    """JSON text for a node tree, laid out the way json.dumps would"""
    key_sep = ':' if indent is None else ': '

    def newline(level: int) -> str:
        return '' if indent is None else '\n' + ' ' * (indent * level)

    parts: List[str] = []
    branch = set()
    frames = []

    def enter(node: ModuleNode, level: int):
        if node.path in branch:
            raise _circular_reference(node.path)
        parts.append('{' + newline(level + 1) + '"path"' + key_sep +
                     json.dumps(node.path, ensure_ascii=False) + ',' +
                     newline(level + 1) + '"deps"' + key_sep)
        if not node.deps:
            parts.append('[]' + newline(level) + '}')
            return
        parts.append('[')
        branch.add(node.path)
        frames.append((node, level, enumerate(node.deps)))

    enter(root, 0)
    while frames:
        node, level, deps = frames[-1]
        item = next(deps, None)
        if item is None:
            frames.pop()
            branch.discard(node.path)
            parts.append(newline(level + 1) + ']' + newline(level) + '}')
            continue
        i, dep = item
        parts.append(('' if i == 0 else ',') + newline(level + 2))
        enter(dep, level + 2)

    return ''.join(parts)


def json_formatter(payload: ReportPayload) -> str:
    """Default formatter: compact JSON, `null` when there is no graph"""
    if isinstance(payload, ModuleNode):
        return encode_node(payload)
    return json.dumps(payload, ensure_ascii=False, separators=(',', ':'))


def pretty_json_formatter(payload: ReportPayload) -> str:
    if isinstance(payload, ModuleNode):
        return encode_node(payload, indent=2)
    return json.dumps(payload, ensure_ascii=False, indent=2)


def tree_formatter(payload: ReportPayload) -> str:
    """Indented text tree for a graph, arrow-joined line for a cycle"""
    if payload is None:
        return ''
    if isinstance(payload, list):
        return ' -> '.join(payload)

    lines: List[str] = []
    branch = set()
    frames = []

    def emit(node: ModuleNode, depth: int):
        indent = '  ' * depth
        if node.path in branch:
            lines.append(f"{indent}{node.path} (circular)")
            return
        lines.append(f"{indent}{node.path}")
        branch.add(node.path)
        frames.append((node, depth, iter(node.deps)))

    emit(payload, 0)
    while frames:
        node, depth, deps = frames[-1]
        dep = next(deps, None)
        if dep is None:
            frames.pop()
            branch.discard(node.path)
            continue
        emit(dep, depth + 1)

    return '\n'.join(lines)


FORMATTERS = {
    'json': json_formatter,
    'pretty-json': pretty_json_formatter,
    'tree': tree_formatter
}
