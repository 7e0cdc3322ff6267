import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class FileSystemSink:
    """Writes generated sources under base_dir, one directory per package segment."""

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self.base_dir = Path(base_dir)

    def directory_for(self, package: Optional[str]) -> Path:
        if not package:
            return self.base_dir
        return self.base_dir.joinpath(*package.split("."))

    def write(self, package: Optional[str], filename: str, content: str) -> Path:
        directory = self.directory_for(package)
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / filename
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", target)
        return target
