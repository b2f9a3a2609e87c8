"""!
@brief Manifest (``composer.json``) access.
@details The manifest is read fresh on every lookup and must decode to a JSON
object. Keys are addressed either by a single name or by an ordered sequence
of segments for nested values.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Sequence, Tuple

from . import logging_ext
from .errors import KeyNotFoundError, ManifestNotFoundError, ManifestParseError, TypeMismatchError

__all__ = ["load_manifest", "normalize_keys", "get_key_string"]


def normalize_keys(keys: str | Sequence[str]) -> Tuple[str, ...]:
    """!
    @brief Turn a single key or a key path into a tuple of segments.
    @throws ValueError If the key path is empty.
    """

    segments = (keys,) if isinstance(keys, str) else tuple(str(segment) for segment in keys)
    if not segments:
        raise ValueError("At least one manifest key is required")
    return segments


def load_manifest(path: Path) -> Dict[str, object]:
    """!
    @brief Read and decode the manifest at ``path``.
    @throws ManifestNotFoundError If the file is missing or unreadable.
    @throws ManifestParseError If the content is not a JSON object.
    """

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestNotFoundError(path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestNotFoundError(path, str(exc)) from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(path, str(exc)) from exc

    if not isinstance(data, dict):
        raise ManifestParseError(path, f"expected a JSON object, got {type(data).__name__}")

    logging_ext.get_machine_logger().debug(
        "manifest_read", extra={"event": "manifest_read", "path": str(path)}
    )
    return data


def get_key_string(path: Path, keys: str | Sequence[str]) -> str:
    """!
    @brief Return the string stored at ``keys`` in the manifest at ``path``.
    @param path Manifest file location.
    @param keys Top-level key or ordered key path.
    @throws KeyNotFoundError If any segment is missing.
    @throws TypeMismatchError If the final value is not a string.
    """

    segments = normalize_keys(keys)
    node: object = load_manifest(path)
    for segment in segments:
        if not isinstance(node, dict) or segment not in node:
            raise KeyNotFoundError(path, segments)
        node = node[segment]

    if not isinstance(node, str):
        raise TypeMismatchError(path, segments, node)
    return node
