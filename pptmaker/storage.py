import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .models import Outline

logger = logging.getLogger("pptmaker.storage")

OUTPUT_EXTENSION = ".pptx"
SIDECAR_EXTENSION = ".json"
DEFAULT_BASENAME = "Presentation"
MAX_BASENAME_LEN = 50

_ALNUM_RUN = re.compile(r"[^\W_]+")


def filename_from(title: str) -> str:
    """'My Talk: Q3 Review!' -> 'My-Talk-Q3-Review.pptx'"""
    base = "-".join(_ALNUM_RUN.findall(title or ""))[:MAX_BASENAME_LEN]
    return (base or DEFAULT_BASENAME) + OUTPUT_EXTENSION


def sidecar_path(output_path: Path) -> Path:
    return Path(output_path).with_suffix(SIDECAR_EXTENSION)


def _created_at(path: Path) -> float:
    """Creation time where the platform records one, else ctime; 0.0 (oldest) if unreadable."""
    try:
        st = path.stat()
    except OSError:
        return 0.0
    return getattr(st, "st_birthtime", st.st_ctime)


class SidecarStatus(str, Enum):
    FOUND = "found"
    MISSING = "missing"
    CORRUPT = "corrupt"


@dataclass
class SidecarLookup:
    status: SidecarStatus
    outline: Optional[Outline] = None
    error: Optional[Exception] = None


class LocalStore:
    """Generated files and their outline sidecars in one private directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, data: bytes, filename: str) -> Path:
        path = self.directory / filename
        path.write_bytes(data)
        logger.info("saved %s (%d bytes)", path.name, len(data))
        return path

    def save_outline_sidecar(self, outline: Outline, for_path: Path) -> Path:
        path = sidecar_path(for_path)
        exclude = {"template"} if outline.template is None else None
        path.write_text(outline.model_dump_json(indent=2, exclude=exclude), "utf-8")
        return path

    def read_outline_sidecar(self, for_path: Path) -> SidecarLookup:
        path = sidecar_path(for_path)
        if not path.exists():
            return SidecarLookup(SidecarStatus.MISSING)
        try:
            outline = Outline.model_validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("could not load outline sidecar %s: %s", path.name, e)
            return SidecarLookup(SidecarStatus.CORRUPT, error=e)
        return SidecarLookup(SidecarStatus.FOUND, outline=outline)

    def load_outline_sidecar(self, for_path: Path) -> Optional[Outline]:
        return self.read_outline_sidecar(for_path).outline

    def list(self) -> List[Path]:
        """Saved output files, newest first."""
        try:
            files = [p for p in self.directory.iterdir()
                     if p.suffix == OUTPUT_EXTENSION and not p.name.startswith(".") and p.is_file()]
        except OSError as e:
            logger.warning("error listing presentations in %s: %r", self.directory, e)
            return []
        return sorted(files, key=_created_at, reverse=True)

    def delete(self, path: Path) -> None:
        path = Path(path)
        path.unlink()
        try:
            sidecar_path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("could not delete sidecar for %s: %r", path.name, e)
        logger.info("deleted %s", path.name)
