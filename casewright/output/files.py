"""Writing a finalized file set to disk."""

import logging
from pathlib import Path, PurePosixPath

from ..conformance.errors import ProducerContractError
from ..conformance.processor import ensure_file_set

logger = logging.getLogger(__name__)


def _safe_relative(path: str) -> PurePosixPath:
    relative = PurePosixPath(path.replace("\\", "/"))
    if relative.is_absolute() or ".." in relative.parts or not relative.parts:
        raise ProducerContractError(f"Refusing to write outside the output directory: {path}", path)
    return relative


def write_file_set(files: dict[str, str], output_dir: str | Path) -> list[Path]:
    """Write every file of a set below ``output_dir``.

    All paths are checked before anything is written.

    Returns:
        The written paths, in mapping order.

    Raises:
        ProducerContractError: If the set is malformed or a path is absolute
            or escapes the output directory.
    """
    files = ensure_file_set(files)
    targets = [(_safe_relative(path), content) for path, content in files.items()]

    out_path = Path(output_dir)
    written: list[Path] = []
    for relative, content in targets:
        file_path = out_path.joinpath(*relative.parts)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        written.append(file_path)
        logger.debug("Wrote %s", file_path)

    return written
