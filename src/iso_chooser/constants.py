"""
Constants for iso-chooser-menu.
"""

__version__ = "1.0.0"

PROGRAM_NAME = "iso-chooser-menu"

# Configuration lookup
CONFIG_ENV_VAR = "ISO_CHOOSER_CONFIG"
ARCH_ENV_VAR = "ISO_CHOOSER_ARCH"
CONFIG_FILE_NAME = "iso-chooser.toml"
SYSTEM_CONFIG_PATH = "/etc/iso-chooser.toml"

# Feed defaults
DEFAULT_MIRROR_URL = "http://cdimage.ubuntu.com/"
DEFAULT_CAPTION = "Choose an Ubuntu version to install"
ISO_FTYPE = "iso"

# Screen layout
BANNER_HEIGHT = 3
BUTTON_GLYPH = "▸"
BUTTON_DECORATION_WIDTH = 6  # "[ " + " ▸ ]"
BANNER_UPPER_GLYPH = "▀"
BANNER_LOWER_GLYPH = "▄"

# Output keys, in write order
OUTPUT_KEYS = ("MEDIA_URL", "MEDIA_LABEL", "MEDIA_256SUM", "MEDIA_SIZE")

MAX_IMAGE_SIZE = 2**63 - 1
