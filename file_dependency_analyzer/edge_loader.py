"""
Loaders for recorded edge streams (JSON or CSV)
"""

import io
import json
from pathlib import Path
from typing import List, Union
import logging

import pandas as pd

from .exceptions import EdgeLoadError
from .models import Edge

logger = logging.getLogger(__name__)

EDGE_COLUMNS = ('path', 'issuer')


def _edge_from_record(record, index: int) -> Edge:
    if isinstance(record, dict):
        if 'path' not in record:
            raise EdgeLoadError(f"Edge #{index} has no 'path'")
        path = record['path']
        # an edge without issuer is the entry module
        issuer = record.get('issuer') or path
    elif isinstance(record, (list, tuple)) and len(record) == 2:
        path, issuer = record
    else:
        raise EdgeLoadError(f"Edge #{index} must be an object or a [path, issuer] pair, got {record!r}")
    return Edge(path=str(path), issuer=str(issuer))


def load_edges_json(content: str) -> List[Edge]:
    """Parse a JSON array of {"path", "issuer"} objects or [path, issuer] pairs"""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise EdgeLoadError(f"Failed to parse edge JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get('edges', [])
    if not isinstance(data, list):
        raise EdgeLoadError("Edge JSON must be an array or an object with an 'edges' array")

    edges = [_edge_from_record(record, i) for i, record in enumerate(data)]
    logger.info(f"Loaded {len(edges)} edges from JSON")
    return edges


def load_edges_csv(content: str) -> List[Edge]:
    """Parse CSV with `path` and `issuer` columns; an empty issuer marks the entry"""
    try:
        df = pd.read_csv(io.StringIO(content), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise EdgeLoadError(f"Failed to parse edge CSV: {e}") from e

    missing = [column for column in EDGE_COLUMNS if column not in df.columns]
    if missing:
        raise EdgeLoadError(f"Edge CSV is missing columns: {', '.join(missing)}")

    edges = [
        Edge(path=row.path, issuer=row.issuer or row.path)
        for row in df.loc[:, list(EDGE_COLUMNS)].itertuples(index=False)
    ]
    logger.info(f"Loaded {len(edges)} edges from CSV")
    return edges


def load_edges_file(file_path: Union[str, Path]) -> List[Edge]:
    """Load edges from a .json or .csv file"""
    file_path = Path(file_path)
    try:
        content = file_path.read_text(encoding='utf-8')
    except OSError as e:
        raise EdgeLoadError(f"Cannot read {file_path}: {e}") from e

    suffix = file_path.suffix.lower()
    if suffix == '.json':
        return load_edges_json(content)
    if suffix == '.csv':
        return load_edges_csv(content)
    raise EdgeLoadError(f"Unsupported edge file type {suffix!r}, expected .json or .csv")
