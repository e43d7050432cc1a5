"""
Path normalization strategies applied before edges reach the assembler
"""

import os
from typing import Callable, Optional, Union
import logging

logger = logging.getLogger(__name__)

PathType = Union[str, Callable[[str], str]]

ABSOLUTE = 'absolute'
RELATIVE = 'relative'


class PathNormalizer:
    """Turns a resolved file path into the key used for graph nodes"""

    def __init__(self, path_type: PathType = RELATIVE, cwd: Optional[str] = None):
        self.path_type = path_type
        self.cwd = cwd or os.getcwd()
        if not callable(path_type) and path_type not in (ABSOLUTE, RELATIVE):
            logger.warning(f"Unknown path type {path_type!r}, using relative paths")

    def __call__(self, file_path: str) -> str:
        return self.normalize(file_path)

    def normalize(self, file_path: str) -> str:
        if callable(self.path_type):
            return self.path_type(file_path)
        if self.path_type == ABSOLUTE:
            return file_path
        return os.path.relpath(file_path, self.cwd)
