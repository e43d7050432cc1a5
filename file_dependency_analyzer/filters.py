"""
Edge admission by include paths and file extensions
"""

import os
from typing import Iterable, List


class EdgeFilter:
    """Admits an edge only when both ends pass the include and extension checks"""

    def __init__(self, includes: Iterable[str], file_types: Iterable[str]):
        self.includes: List[str] = list(includes)
        self.file_types: List[str] = list(file_types)

    def validate_path(self, file_path: str, issuer_path: str) -> bool:
        return (
            any(include in file_path for include in self.includes) and
            any(include in issuer_path for include in self.includes)
        )

    def validate_file_type(self, file_path: str, issuer_path: str) -> bool:
        return (
            os.path.splitext(file_path)[1] in self.file_types and
            os.path.splitext(issuer_path)[1] in self.file_types
        )

    def admits(self, file_path: str, issuer_path: str) -> bool:
        return self.validate_path(file_path, issuer_path) and self.validate_file_type(file_path, issuer_path)
