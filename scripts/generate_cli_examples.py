from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from mandelbands import decode

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--width", "160", "--height", "120"]


@dataclass
class Expected:
    path: Path
    size: tuple[int, int]


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return [sys.executable, "mandel.py", *self.args]


EXAMPLES: list[Example] = [
    Example(
        name="defaults",
        args=[*BASE_ARGS, "--output", str(EXAMPLES_ROOT / "defaults" / "mandel.png")],
        expected=[Expected(EXAMPLES_ROOT / "defaults" / "mandel.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "defaults"],
    ),
    Example(
        name="size",
        args=["--width", "240", "--height", "90", "--output", str(EXAMPLES_ROOT / "size" / "wide.png")],
        expected=[Expected(EXAMPLES_ROOT / "size" / "wide.png", (240, 90))],
        clean=[EXAMPLES_ROOT / "size"],
    ),
    Example(
        name="full-set",
        args=[
            *BASE_ARGS,
            "--left",
            "-2.5",
            "--top",
            "1.125",
            "--right",
            "0.5",
            "--bottom",
            "-1.125",
            "--output",
            str(EXAMPLES_ROOT / "full-set" / "whole.png"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "full-set" / "whole.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "full-set"],
    ),
    Example(
        name="single-thread",
        args=[*BASE_ARGS, "--threads", "1", "--output", str(EXAMPLES_ROOT / "single-thread" / "serial.png")],
        expected=[Expected(EXAMPLES_ROOT / "single-thread" / "serial.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "single-thread"],
    ),
    Example(
        name="many-threads",
        args=[*BASE_ARGS, "--threads", "16", "--output", str(EXAMPLES_ROOT / "many-threads" / "parallel.png")],
        expected=[Expected(EXAMPLES_ROOT / "many-threads" / "parallel.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "many-threads"],
    ),
    Example(
        name="format",
        args=[*BASE_ARGS, "--format", "tiff", "--output", str(EXAMPLES_ROOT / "format" / "custom")],
        expected=[Expected(EXAMPLES_ROOT / "format" / "custom.tiff", (160, 120))],
        clean=[EXAMPLES_ROOT / "format"],
    ),
    Example(
        name="verbose",
        args=[*BASE_ARGS, "--verbose", "--output", str(EXAMPLES_ROOT / "verbose" / "diagnostic.png")],
        expected=[Expected(EXAMPLES_ROOT / "verbose" / "diagnostic.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "verbose"],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    clean = example.clean or []
    _ensure_clean(clean)
    for expected in example.expected:
        expected.path.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")
        pixels = decode(expected.path.read_bytes())
        height, width = pixels.shape
        if (width, height) != expected.size:
            raise RuntimeError(f"{expected.path} is {width}x{height}, expected {expected.size[0]}x{expected.size[1]}")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args())
        if completed.returncode != 0:
            raise RuntimeError(f"Example {example.name} failed with {completed.returncode}")
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
