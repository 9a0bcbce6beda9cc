"""
Choice set construction for iso-chooser-menu.
"""

import logging
from pathlib import Path
from typing import Iterable, Sequence, Tuple, Union

from .constants import DEFAULT_MIRROR_URL
from .feed import FeedData, load_feed, select_newest
from .models import ChoiceSet

# Set up logging
logger = logging.getLogger(__name__)


def build(
    feeds: Iterable[Tuple[FeedData, str]], mirror_url: str = DEFAULT_MIRROR_URL
) -> ChoiceSet:
    """Build a choice set with one record per (feed, architecture) pair.

    Feeds are read in order and the first failure propagates; no partial
    set is ever returned.
    """
    records = [
        select_newest(feed_data, architecture, mirror_url)
        for feed_data, architecture in feeds
    ]
    return ChoiceSet(records)


def read_choices(
    paths: Sequence[Union[str, Path]],
    architecture: str,
    mirror_url: str = DEFAULT_MIRROR_URL,
) -> ChoiceSet:
    """Load each feed file and build the choice set from them."""
    choices = build(((load_feed(path), architecture) for path in paths), mirror_url)
    for path, record in zip(paths, choices):
        logger.debug(f"{path}: {record.label} <{record.url}>")
    return choices
