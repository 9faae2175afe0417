"""Startup file pipeline: greeting, concatenation and the chained pointer read.

All steps are blocking and strictly sequential. A failing read stops the
pipeline at that step; nothing after it is attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GREETING = "Hello World!"


class FilePipelineError(Exception):
    """Raised when a pipeline step cannot read or write its file."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class PipelinePaths:
    """File layout used by the pipeline, all rooted in one text directory."""

    txt_dir: Path
    final_name: str = "final.txt"

    @property
    def input_file(self) -> Path:
        return self.txt_dir / "input.txt"

    @property
    def append_file(self) -> Path:
        return self.txt_dir / "append.txt"

    @property
    def start_file(self) -> Path:
        return self.txt_dir / "start.txt"

    @property
    def output_file(self) -> Path:
        return self.txt_dir / "output.txt"

    @property
    def final_file(self) -> Path:
        return self.txt_dir / self.final_name


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FilePipelineError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise FilePipelineError(path, f"invalid UTF-8 at byte {exc.start}") from exc


def write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FilePipelineError(path, exc.strerror or str(exc)) from exc


def write_greeting(path: Path, text: str = GREETING) -> None:
    write_text(path, text)
    logger.info("Text written: %s", path)


def concat_files(first: Path, second: Path, target: Path) -> str:
    """Write `first` and `second` joined by a newline into `target`."""
    combined = f"{read_text(first)}\n{read_text(second)}"
    write_text(target, combined)
    logger.info("Final text written: %s", target)
    return combined


def resolve_pointer(txt_dir: Path, pointer_file: Path) -> Path:
    """Read the file name stored in `pointer_file` and resolve it inside `txt_dir`.

    The pointer holds a bare name without extension (``read-this`` names
    ``read-this.txt``). Names that would escape `txt_dir` are rejected.
    """
    name = read_text(pointer_file).strip()
    if not name:
        raise FilePipelineError(pointer_file, "pointer file is empty")

    base = txt_dir.resolve()
    target = (base / f"{name}.txt").resolve()
    if target.parent != base:
        raise FilePipelineError(pointer_file, f"pointer {name!r} leaves {base}")
    return target


def chained_read(paths: PipelinePaths) -> str:
    """Follow the pointer file, then write the pointed-to text plus the append file.

    Returns the combined text written to `paths.output_file`.
    """
    pointed = resolve_pointer(paths.txt_dir, paths.start_file)
    first = read_text(pointed)
    logger.debug("Pointer %s -> %s", paths.start_file.name, pointed.name)

    second = read_text(paths.append_file)

    combined = f"{first}\n{second}"
    write_text(paths.output_file, combined)
    logger.info("File written: %s", paths.output_file)
    return combined


def run_startup_pipeline(paths: PipelinePaths) -> None:
    """Run all startup steps in order."""
    write_greeting(paths.output_file)
    concat_files(paths.input_file, paths.append_file, paths.final_file)
    chained_read(paths)
