"""
Report sink: writes the serialized report to its destination
"""

from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class ReportSink:
    """Creates the output directory and writes the report once"""

    def __init__(self, output_path: str, output_filename: str):
        self.output_path = Path(output_path)
        self.output_filename = output_filename

    @property
    def target(self) -> Path:
        return (self.output_path / self.output_filename).resolve()

    def write(self, content: str) -> Optional[Path]:
        """Write the report; failures are logged and None is returned"""
        target = self.target
        try:
            self.output_path.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to write dependency report to {target}: {e}")
            return None

        logger.info(f"Dependency analysis complete: {target}")
        return target
