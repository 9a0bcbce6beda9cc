import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir))

from src.iso_chooser.config import ChooserConfig, SettingsConfig  # noqa: E402
from src.iso_chooser.models import ChoiceSet, ImageRecord  # noqa: E402

# ============================================================================
# COMMON TEST DATA
# ============================================================================

SERVER_SHA256 = "874452797430a94ca240c95d8503035aa145bd03ef7d84f9b23b78f3c5099aed"
DESKTOP_SHA256 = "c2e6f4dc37ac944e2ed507f87c6188dd4d3179bf4a3f9e110d3c88d1f3294bdc"
OLD_SHA256 = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"

SERVER_PRODUCT_ID = "com.ubuntu.cdimage.daily:ubuntu-server:daily-live:24.04:amd64"
DESKTOP_PRODUCT_ID = "com.ubuntu.cdimage.daily:ubuntu:daily-live:24.04:amd64"


def make_item(
    path: str,
    sha256: Optional[str] = SERVER_SHA256,
    size: Any = 2754981888,
    ftype: Optional[str] = "iso",
    **extra: Any,
) -> Dict[str, Any]:
    """Build one SimpleStreams item entry, omitting fields set to None."""
    item: Dict[str, Any] = {"path": path, "sha256": sha256, "size": size, "ftype": ftype}
    item.update(extra)
    return {k: v for k, v in item.items() if v is not None}


def make_product(
    versions: Dict[str, Dict[str, Any]],
    arch: str = "amd64",
    os_name: Optional[str] = "ubuntu-server",
    release_title: Optional[str] = "24.04 LTS",
    release_codename: Optional[str] = "Noble Numbat",
) -> Dict[str, Any]:
    """Build a product whose versions map version id -> items."""
    product: Dict[str, Any] = {
        "arch": arch,
        "os": os_name,
        "release": "noble",
        "release_title": release_title,
        "release_codename": release_codename,
        "versions": {
            version_id: {"items": items} for version_id, items in versions.items()
        },
    }
    return {k: v for k, v in product.items() if v is not None}


def make_feed(products: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Wrap products in a products:1.0 document."""
    return {
        "content_id": "com.ubuntu.cdimage.daily:ubuntu-server",
        "datatype": "image-downloads",
        "format": "products:1.0",
        "products": products,
    }


# ============================================================================
# FEED FIXTURES
# ============================================================================


@pytest.fixture
def server_feed():
    """A server feed with two dated builds for amd64 and one for arm64."""
    return make_feed(
        {
            SERVER_PRODUCT_ID: make_product(
                {
                    "20240101": {
                        "iso": make_item(
                            "ubuntu-server/daily-live/20240101/noble-live-server-amd64.iso",
                            sha256=OLD_SHA256,
                        )
                    },
                    "20240201": {
                        "iso": make_item(
                            "ubuntu-server/daily-live/20240201/noble-live-server-amd64.iso"
                        ),
                        "manifest": make_item(
                            "ubuntu-server/daily-live/20240201/noble-live-server-amd64.manifest",
                            ftype="manifest",
                            sha256=OLD_SHA256,
                            size=51234,
                        ),
                    },
                }
            ),
            "com.ubuntu.cdimage.daily:ubuntu-server:daily-live:24.04:arm64": make_product(
                {
                    "20240301": {
                        "iso": make_item(
                            "ubuntu-server/daily-live/20240301/noble-live-server-arm64.iso",
                            sha256=OLD_SHA256,
                        )
                    }
                },
                arch="arm64",
            ),
        }
    )


@pytest.fixture
def desktop_feed():
    """A desktop feed with a single amd64 build."""
    return make_feed(
        {
            DESKTOP_PRODUCT_ID: make_product(
                {
                    "20240415": {
                        "iso": make_item(
                            "ubuntu/daily-live/20240415/noble-desktop-amd64.iso",
                            sha256=DESKTOP_SHA256,
                            size=6114656256,
                        )
                    }
                },
                os_name="ubuntu-desktop",
            )
        }
    )


@pytest.fixture
def write_feed(tmp_path):
    """Factory fixture writing a feed document to a JSON file."""

    def _factory(document: Any, name: str = "feed.json") -> Path:
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document)
        else:
            path.write_text(json.dumps(document))
        return path

    return _factory


# ============================================================================
# RECORD FIXTURES
# ============================================================================


@pytest.fixture
def server_record():
    return ImageRecord(
        url="http://cdimage.ubuntu.com/ubuntu-server/daily-live/20240201/noble-live-server-amd64.iso",
        label="Ubuntu Server 24.04",
        checksum=SERVER_SHA256,
        size=2754981888,
    )


@pytest.fixture
def desktop_record():
    return ImageRecord(
        url="http://cdimage.ubuntu.com/ubuntu/daily-live/20240415/noble-desktop-amd64.iso",
        label="Ubuntu Desktop 24.04",
        checksum=DESKTOP_SHA256,
        size=6114656256,
    )


@pytest.fixture
def two_choices(server_record, desktop_record):
    return ChoiceSet([server_record, desktop_record])


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================


@pytest.fixture
def chooser_config():
    """Configuration with a fixed architecture and syslog disabled."""
    return ChooserConfig(settings=SettingsConfig(architecture="amd64", syslog=False))


@pytest.fixture
def mock_get_config(mocker, chooser_config):
    """Make the CLI use the test configuration."""
    return mocker.patch("src.iso_chooser.cli.get_config", return_value=chooser_config)


@pytest.fixture
def mock_setup_logging(mocker):
    """Keep the CLI from touching the root logger."""
    return mocker.patch("src.iso_chooser.cli.setup_logging")


# ============================================================================
# CURSES FIXTURES
# ============================================================================


class FakeWindow:
    """Stands in for a curses window, recording what is drawn on it."""

    def __init__(self, lines: int = 24, cols: int = 80, keys: Optional[List[int]] = None):
        self.lines = lines
        self.cols = cols
        self.keys: List[int] = list(keys or [])
        self.drawn: Dict[int, List[tuple]] = {}
        self.keypad_enabled = False
        self.refresh_count = 0
        self.erased = False
        self.getch_count = 0

    def getmaxyx(self):
        return (self.lines, self.cols)

    def keypad(self, flag):
        self.keypad_enabled = flag

    def insstr(self, y, x, text, attr=0):
        self.drawn.setdefault(y, []).append((x, text, attr))

    def move(self, y, x):
        pass

    def clrtoeol(self):
        pass

    def erase(self):
        self.erased = True

    def refresh(self):
        self.refresh_count += 1

    def getch(self):
        self.getch_count += 1
        if not self.keys:
            raise AssertionError("menu read more keys than the test scripted")
        return self.keys.pop(0)

    def last_drawn(self, y):
        """The most recent (x, text, attr) drawn on row ``y``."""
        return self.drawn[y][-1]


class ClippingWindow(FakeWindow):
    """A FakeWindow that fails like curses when drawing below its last row."""

    def insstr(self, y, x, text, attr=0):
        import curses

        if y >= self.lines:
            raise curses.error("insstr() returned ERR")
        super().insstr(y, x, text, attr)


class FakeCurses:
    """Handles for a patched curses module."""

    def __init__(self, screen: FakeWindow, window: FakeWindow, mocks: Dict[str, Any]):
        self.screen = screen
        self.window = window
        self.mocks = mocks

    def press(self, *keys: int) -> None:
        self.window.keys.extend(keys)


@pytest.fixture
def fake_curses(mocker):
    """Patch curses so the menu runs against in-memory windows."""
    import curses

    screen = FakeWindow()
    window = FakeWindow()

    mocks = {
        "initscr": mocker.patch("curses.initscr", return_value=screen),
        "noecho": mocker.patch("curses.noecho"),
        "cbreak": mocker.patch("curses.cbreak"),
        "has_colors": mocker.patch("curses.has_colors", return_value=True),
        "start_color": mocker.patch("curses.start_color"),
        "curs_set": mocker.patch("curses.curs_set"),
        "can_change_color": mocker.patch("curses.can_change_color", return_value=False),
        "init_color": mocker.patch("curses.init_color"),
        "init_pair": mocker.patch("curses.init_pair"),
        "color_pair": mocker.patch("curses.color_pair", side_effect=lambda n: n << 8),
        "newwin": mocker.patch("curses.newwin", return_value=window),
        "endwin": mocker.patch("curses.endwin"),
    }
    mocker.patch.object(curses, "COLORS", 256, create=True)
    mocker.patch("src.iso_chooser.terminal.init_locale")
    return FakeCurses(screen, window, mocks)
