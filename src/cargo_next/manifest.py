"""Formatting-preserving access to the version field of a TOML manifest.

Every call re-reads the file; no parsed document outlives a single read or
write. Edits go through ``tomlkit`` so comments, whitespace, key order and
line endings of untouched content survive the round trip byte for byte.
"""

import contextlib
import os
import shutil
import tempfile
from collections.abc import Mapping
from typing import Any, Tuple

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import InvalidStringError, TOMLKitError
from tomlkit.items import String

from cargo_next.errors import (
    InvalidFieldType,
    ManifestIOError,
    ManifestParseError,
    PathLike,
    ValueEncodingError,
)
from cargo_next.logging import get_logger

log = get_logger("cargo_next.manifest")

MANIFEST_FILE_NAME = "Cargo.toml"
VERSION_KEY_PATH: Tuple[str, ...] = ("package", "version")


def _read_text(path: PathLike) -> str:
    # newline="" keeps CRLF manifests intact on write
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise ManifestIOError(path, e) from e
    except UnicodeDecodeError as e:
        raise ManifestParseError(path, f"invalid utf-8: {e}") from e


def _write_bytes(path: PathLike, data: bytes) -> None:
    """Replace the file at ``path`` with ``data`` via a sibling temp file."""
    target = os.path.realpath(path)
    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=".cargo-next-", suffix=".tmp", dir=os.path.dirname(target)
        )
    except OSError as e:
        raise ManifestIOError(path, e) from e
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        shutil.copymode(target, tmp_path)
        os.replace(tmp_path, target)
    except OSError as e:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise ManifestIOError(path, e) from e


def load_document(path: PathLike) -> TOMLDocument:
    """Read and parse the manifest at ``path`` into a lossless document."""
    text = _read_text(path)
    try:
        doc = tomlkit.parse(text)
    except TOMLKitError as e:
        raise ManifestParseError(path, str(e)) from e
    log.debug("Parsed manifest %s (%d chars)", path, len(text))
    return doc


def _lookup_string(doc: TOMLDocument, key_path: Tuple[str, ...]) -> str:
    field = key_path[-1]
    node: Any = doc
    for key in key_path:
        if not isinstance(node, Mapping) or key not in node:
            raise InvalidFieldType(field=field, ty="string")
        node = node[key]
    if not isinstance(node, str):
        raise InvalidFieldType(field=field, ty="string")
    if isinstance(node, String):
        return node.unwrap()
    return node


def _replacement(old: Any, new_value: str) -> String:
    """Build the new string item, keeping literal quoting when possible."""
    if isinstance(old, String) and old.type.is_literal():
        try:
            return tomlkit.string(new_value, literal=True)
        except InvalidStringError:
            log.debug("Value %r cannot be a literal string; using basic", new_value)
    return tomlkit.string(new_value)


def read_version_string(
    path: PathLike, key_path: Tuple[str, ...] = VERSION_KEY_PATH
) -> str:
    """Return the exact string stored at ``package.version``.

    Raises ``ManifestIOError`` when the file cannot be read,
    ``ManifestParseError`` for invalid TOML and ``InvalidFieldType`` when the
    path is missing or does not hold a string.
    """
    doc = load_document(path)
    value = _lookup_string(doc, key_path)
    log.info("Read %s=%r from %s", ".".join(key_path), value, path)
    return value


def write_version_string(
    path: PathLike, new_value: str, key_path: Tuple[str, ...] = VERSION_KEY_PATH
) -> None:
    """Replace the ``package.version`` value and rewrite the manifest.

    The value is written verbatim; checking that it is a valid semantic
    version is up to the caller. Missing tables along the key path are
    created. The document is encoded before anything touches the disk and
    lands through an atomic rename, so a failure leaves the manifest as it
    was.
    """
    doc = load_document(path)
    *parents, leaf = key_path
    table: Any = doc
    for key in parents:
        if key not in table:
            log.info("Creating missing table [%s] in %s", key, path)
            table[key] = tomlkit.table()
        table = table[key]
        if not isinstance(table, Mapping):
            raise InvalidFieldType(field=key, ty="table")

    table[leaf] = _replacement(table.get(leaf), new_value)
    text = tomlkit.dumps(doc)
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueEncodingError(new_value, e.reason) from e
    _write_bytes(path, data)
    log.info("Wrote %s=%r to %s", ".".join(key_path), new_value, path)
