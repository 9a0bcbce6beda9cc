"""
SimpleStreams feed reading for iso-chooser-menu.

A feed is a ``products:1.0`` document as published under
``http://cdimage.ubuntu.com/streams/v1/``. Each product carries an
architecture and a ``versions`` map keyed by a version identifier, usually
a build date such as ``20240423`` or ``20240423.1``. Each version lists its
downloadable ``items``.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union
from urllib.parse import urljoin

from .constants import DEFAULT_MIRROR_URL
from .errors import IncompleteRecordError, NoMatchError, ParseError
from .models import ImageRecord
from .validators import is_feed_object, is_iso_item, is_sha256_hex

# Set up logging
logger = logging.getLogger(__name__)

# Type aliases for the version ordering
VersionPart = Tuple[int, int, str]
VersionSortKey = Tuple[int, int, int, Tuple[VersionPart, ...]]
FeedData = Union[str, bytes, Dict[str, Any]]

_DATE_VERSION = re.compile(r"^(\d{8})(?:\.(\d+))?$")
_VERSION_PART = re.compile(r"\d+|[^\d.]+")


class _Candidate(NamedTuple):
    """A matching feed item with the context needed to build a record."""

    product_id: str
    product: Dict[str, Any]
    version_id: str
    item: Dict[str, Any]


def version_key(version_id: str) -> VersionSortKey:
    """Sort key giving a total order over feed version identifiers.

    Date identifiers (YYYYMMDD, optionally with a .N respin) rank above
    anything else and compare by date then respin. Other identifiers
    compare component-wise, numbers numerically and numbers below words.
    """
    date_match = _DATE_VERSION.match(version_id)
    if date_match:
        date = int(date_match.group(1))
        respin = int(date_match.group(2)) if date_match.group(2) else 0
        return (1, date, respin, ())

    parts: List[VersionPart] = []
    for token in _VERSION_PART.findall(version_id):
        if token.isdecimal():
            parts.append((0, int(token), ""))
        else:
            parts.append((1, 0, token))
    return (0, 0, 0, tuple(parts))


def _decode(feed_data: FeedData) -> Dict[str, Any]:
    """Decode raw feed data into the document's top-level object."""
    if isinstance(feed_data, (str, bytes)):
        try:
            document = json.loads(feed_data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"feed is not valid JSON: {e}") from e
    else:
        document = feed_data

    if not is_feed_object(document):
        raise ParseError("feed root is not a JSON object")
    products = document.get("products")
    if not is_feed_object(products):
        raise ParseError("feed has no 'products' object")
    return document


def _item_architecture(product: Dict[str, Any], item: Dict[str, Any]) -> Optional[str]:
    arch = item.get("arch", product.get("arch"))
    return arch if isinstance(arch, str) else None


def _find_newest(products: Dict[str, Any], architecture: str) -> Optional[_Candidate]:
    """Walk the feed in document order and keep the newest candidate."""
    best: Optional[_Candidate] = None
    best_key: Optional[VersionSortKey] = None

    for product_id, product in products.items():
        if not is_feed_object(product):
            continue
        versions = product.get("versions")
        if not is_feed_object(versions):
            continue

        for version_id, version in versions.items():
            if not is_feed_object(version):
                continue
            items = version.get("items")
            if not is_feed_object(items):
                continue

            for item in items.values():
                if not is_iso_item(item):
                    continue
                if _item_architecture(product, item) != architecture:
                    continue

                key = version_key(version_id)
                # >= so that on equal versions the later entry wins
                if best_key is None or key >= best_key:
                    best = _Candidate(product_id, product, version_id, item)
                    best_key = key

    return best


def product_label(product: Mapping[str, Any]) -> Optional[str]:
    """Build a display name like 'Ubuntu Server 22.10 (Kinetic Kudu)'."""
    os_name = product.get("os")
    release_title = product.get("release_title")
    if not isinstance(os_name, str) or not os_name:
        return None
    if not isinstance(release_title, str) or not release_title:
        return None

    title = " ".join(word.capitalize() for word in os_name.split("-") if word)
    label = f"{title} {release_title}"

    codename = product.get("release_codename")
    if isinstance(codename, str) and codename:
        label = f"{label} ({codename})"
    return label


def _parse_size(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def _to_record(candidate: _Candidate, mirror_url: str) -> ImageRecord:
    where = f"{candidate.product_id} version {candidate.version_id}"
    item = candidate.item

    path = item.get("path")
    if not isinstance(path, str) or not path:
        raise IncompleteRecordError("path", where)

    label = product_label(candidate.product)
    if label is None:
        raise IncompleteRecordError("label", where)

    checksum = item.get("sha256")
    if not is_sha256_hex(checksum):
        raise IncompleteRecordError("sha256", where)

    size = _parse_size(item.get("size"))
    if size is None:
        raise IncompleteRecordError("size", where)

    base = mirror_url if mirror_url.endswith("/") else f"{mirror_url}/"
    try:
        return ImageRecord(
            url=urljoin(base, path),
            label=label,
            checksum=checksum,
            size=size,
        )
    except IncompleteRecordError as e:
        raise IncompleteRecordError(e.field_name, where) from e


def select_newest(
    feed_data: FeedData,
    architecture: str,
    mirror_url: str = DEFAULT_MIRROR_URL,
) -> ImageRecord:
    """Return the newest ISO for ``architecture`` described by a feed."""
    document = _decode(feed_data)
    candidate = _find_newest(document["products"], architecture)
    if candidate is None:
        source = document.get("content_id")
        raise NoMatchError(architecture, source if isinstance(source, str) else "feed")

    logger.debug(
        f"Newest {architecture} entry: {candidate.product_id} {candidate.version_id}"
    )
    return _to_record(candidate, mirror_url)


def load_feed(path: Union[str, Path]) -> Dict[str, Any]:
    """Read and decode one feed file."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise ParseError(f"failed to read feed [{path}]: {e.strerror or e}") from e

    try:
        return _decode(raw)
    except ParseError as e:
        raise ParseError(f"{path}: {e}") from e
