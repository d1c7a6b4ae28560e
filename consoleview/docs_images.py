"""Check that the images referenced by the console README exist."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Iterable
from pathlib import Path

README_PATH = Path("tokio-console") / "README.md"

_IMAGE_PATTERN = re.compile(
    r"https://\S*?/main/(assets/tokio-console-[\d.]+/\w+\.png)"
)


class DocsImagesError(Exception):
    """Raised when the README's images cannot be verified."""


def find_readme_images(lines: Iterable[str]) -> list[str]:
    """Repository-relative paths of the images linked from ``lines``.

    At most one image is taken from each line.
    """
    images = []
    for line in lines:
        match = _IMAGE_PATTERN.search(line)
        if match:
            images.append(match.group(1))
    return images


def _read_lines(path: Path) -> list[str]:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DocsImagesError(
            f"couldn't open tokio-console README.md for reading: {exc}"
        ) from exc
    lines = []
    for chunk in raw.splitlines():
        try:
            lines.append(chunk.decode("utf-8"))
        except UnicodeDecodeError:
            # Stop at the first line that is not text.
            break
    return lines


def check_docs_images(base_dir: str | Path) -> list[str]:
    """Verify the README images exist under ``base_dir``; return their paths."""
    base = Path(base_dir)
    readme = base / README_PATH
    images = find_readme_images(_read_lines(readme))

    if not images:
        raise DocsImagesError(
            "No images found in tokio-console README.md!\n\n"
            f"The README that was read is located at: {readme}\n\n"
            "This probably means that there is a problem with the image pattern."
        )

    missing = [image for image in images if not (base / image).exists()]
    if missing:
        report = "Tokio console README images missing:\n"
        report += "".join(f" - {path}\n" for path in missing)
        raise DocsImagesError(report)
    return images


def main(argv: list[str] | None = None) -> int:
    """Run a development task; returns the process exit status."""
    parser = argparse.ArgumentParser(description="console dev tasks")
    commands = parser.add_subparsers(dest="command", required=True)
    check = commands.add_parser(
        "check-docs-images", help="check images needed for the docs main page"
    )
    check.add_argument(
        "--base-dir",
        default=".",
        help="repository root holding the README and assets (default: current directory)",
    )
    args = parser.parse_args(argv)

    print("checking images for tokio-console docs.rs page...", file=sys.stderr)
    try:
        images = check_docs_images(args.base_dir)
    except DocsImagesError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(
        f"OK: verified existance of image files in README, count: {len(images)}",
        file=sys.stderr,
    )
    return 0