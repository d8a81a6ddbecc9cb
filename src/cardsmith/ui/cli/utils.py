"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path
import sys

from pydantic import ValidationError
import yaml

from cardsmith.core.exceptions import BundleLoadError
from cardsmith.core.models import CollectionBundle


def read_text_input(path: Path) -> str:
    """Read a UTF-8 input file, or stdin when ``path`` is ``-``."""
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def write_output(content: str | bytes, output: Path | None) -> Path | None:
    """Write ``content`` to ``output`` or stdout; return the written path."""
    if output is None:
        if isinstance(content, bytes):
            sys.stdout.buffer.write(content)
        else:
            sys.stdout.write(content)
            if not content.endswith("\n"):
                sys.stdout.write("\n")
        sys.stdout.flush()
        return None

    output.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        output.write_bytes(content)
    else:
        output.write_text(content, encoding="utf-8")
    return output


def load_bundle(path: Path) -> CollectionBundle:
    """Load a collection bundle from a YAML or JSON file."""
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise BundleLoadError(f"Unable to read bundle '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise BundleLoadError(f"Bundle '{path}' is not valid YAML or JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise BundleLoadError(f"Bundle must contain a mapping with a 'collection' key: {path}")
    try:
        return CollectionBundle.model_validate(payload)
    except ValidationError as exc:
        raise BundleLoadError(f"Bundle '{path}' is invalid: {exc}") from exc


__all__ = ["load_bundle", "read_text_input", "write_output"]
