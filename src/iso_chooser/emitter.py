"""
Writes the chosen image in a form the /bin/sh ``source`` built-in accepts.

Sample output::

    MEDIA_URL="https://releases.ubuntu.com/kinetic/ubuntu-22.10-live-server-amd64.iso"
    MEDIA_LABEL="Ubuntu Server 22.10 (Kinetic Kudu)"
    MEDIA_256SUM="874452797430a94ca240c95d8503035aa145bd03ef7d84f9b23b78f3c5099aed"
    MEDIA_SIZE="1642631168"

Values are written verbatim; quotes or ``$`` in feed data are not escaped.
"""

import logging
from pathlib import Path
from typing import Union

from .constants import OUTPUT_KEYS
from .errors import WriteError
from .models import ImageRecord

# Set up logging
logger = logging.getLogger(__name__)


def format_record(record: ImageRecord) -> str:
    """Format a record as four KEY="value" lines."""
    values = (record.url, record.label, record.checksum, str(record.size))
    return "".join(f'{key}="{value}"\n' for key, value in zip(OUTPUT_KEYS, values))


def emit(path: Union[str, Path], record: ImageRecord) -> None:
    """Write ``record`` to ``path``, replacing any previous content."""
    logger.debug(f"selected: {record.label}")
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(format_record(record))
    except OSError as e:
        raise WriteError(str(path), e.strerror or str(e)) from e
