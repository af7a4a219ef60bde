"""
Scoped staging of HTML content for the renderer process.

The renderer runs in a separate process and reads its input from disk. Each
render call gets its own temporary directory which is removed as a whole when
the ``stage_resources`` context exits, whatever the outcome.
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from .exceptions import PdfResourceError

logger = logging.getLogger(__name__)

DOCUMENT_FILENAME = "document.html"
HEADER_FILENAME = "header.html"
FOOTER_FILENAME = "footer.html"


@dataclass(frozen=True)
class StagedResources:
    """Paths written for a single render call."""

    directory: Path
    document: Optional[Path] = None
    header: Optional[Path] = None
    footer: Optional[Path] = None

    def files(self) -> dict[str, Path]:
        staged = {
            "document": self.document,
            "header": self.header,
            "footer": self.footer,
        }
        return {key: path for key, path in staged.items() if path is not None}


def _write(directory: Path, filename: str, content: Optional[str]) -> Optional[Path]:
    if content is None:
        return None
    path = directory / filename
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise PdfResourceError(
            f"Failed to write temporary file [{path}]", path=str(path), details=str(exc)
        ) from exc
    return path


def _remove(directory: Path, *, strict: bool = True) -> None:
    try:
        shutil.rmtree(directory)
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning("Failed to remove staging directory %s: %s", directory, exc)
        if not strict:
            return
        raise PdfResourceError(
            f"Failed to remove temporary directory [{directory}]",
            path=str(directory),
            details=str(exc),
        ) from exc
    logger.debug("Removed staging directory %s", directory)


@contextmanager
def stage_resources(
    document: Optional[str] = None,
    header: Optional[str] = None,
    footer: Optional[str] = None,
    *,
    base_dir: Optional[str] = None,
    prefix: str = "rail-pdf-",
) -> Iterator[StagedResources]:
    """
    Write HTML content to a fresh temporary directory.

    Args:
        document: Main document HTML; skipped when None (URL rendering).
        header: Header template HTML, optional.
        footer: Footer template HTML, optional.
        base_dir: Parent directory for the staging directory.
        prefix: Prefix of the staging directory name.

    Yields:
        StagedResources naming the directory and the files written.

    Raises:
        PdfResourceError: If the directory or one of the files cannot be written.
    """
    try:
        directory = Path(tempfile.mkdtemp(prefix=prefix, dir=base_dir))
    except OSError as exc:
        target = base_dir or tempfile.gettempdir()
        raise PdfResourceError(
            f"Failed to create temporary directory in [{target}]",
            path=str(target),
            details=str(exc),
        ) from exc

    logger.debug("Staging PDF resources in %s", directory)
    try:
        staged = StagedResources(
            directory=directory,
            document=_write(directory, DOCUMENT_FILENAME, document),
            header=_write(directory, HEADER_FILENAME, header),
            footer=_write(directory, FOOTER_FILENAME, footer),
        )
        yield staged
    except BaseException:
        # Keep the original error; a cleanup failure is only logged here.
        _remove(directory, strict=False)
        raise
    else:
        _remove(directory)
