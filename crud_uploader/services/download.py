"""Download delivery - writes the generated archive into a local folder."""
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from ..models import DEFAULT_FILENAME

logger = logging.getLogger(__name__)


def _safe_name(filename: str, default: str) -> str:
    """Drop any directory part a server may have put in the filename."""
    name = Path(filename.replace("\\", "/")).name.strip()
    if name in {"", ".", ".."}:
        return default
    return name


def _candidates(path: Path) -> Iterator[Path]:
    """Yield ``name.zip``, ``name (1).zip``, ``name (2).zip``..."""
    yield path
    counter = 1
    while True:
        yield path.with_name(f"{path.stem} ({counter}){path.suffix}")
        counter += 1


def _claim_path(source: Path, path: Path) -> Path:
    """Hard-link source to the first free candidate name; never overwrites."""
    candidates = _candidates(path)
    while True:
        candidate = next(candidates)
        try:
            os.link(source, candidate)
        except FileExistsError:
            continue
        return candidate


@contextmanager
def staged_blob(body: bytes, directory: Path) -> Iterator[Path]:
    """
    Hold body in a temporary file next to its destination.

    The temporary file is always removed on exit.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=".crud-up-", suffix=".part", dir=directory)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(body)
        yield tmp_path
    finally:
        tmp_path.unlink(missing_ok=True)


class DirectoryDownloadTarget:
    """
    Saves downloaded archives into an output directory.

    Implements IDownloadTarget protocol.
    """

    def __init__(self, output_dir: Union[str, Path] = ".", default_filename: str = DEFAULT_FILENAME):
        self._output_dir = Path(output_dir).expanduser()
        self._default_filename = default_filename
        self.last_saved: Optional[Path] = None

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def deliver(self, body: bytes, filename: str) -> Path:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        wanted = self._output_dir / _safe_name(filename, self._default_filename)

        with staged_blob(body, self._output_dir) as tmp_path:
            destination = _claim_path(tmp_path, wanted)

        logger.info("Saved %s (%d bytes)", destination, len(body))
        self.last_saved = destination
        return destination
