"""Application-wide defaults shared by the core and the GUI."""

from __future__ import annotations

APP_NAME = "AsciiStudio"

# limits
MIN_LENGTH = 1
MAX_LENGTH = 500
MIN_BRIGHTNESS = 0.0
MAX_BRIGHTNESS = 100.0

# conversion defaults
DEFAULT_BRIGHTNESS = 50.0
DEFAULT_INVERTED = False
STYLE_NORMAL = "normal"
STYLE_BRIGHTNESS = "brightness"
STYLE_HIGH_CONTRAST = "contrast"
STYLES = (STYLE_NORMAL, STYLE_BRIGHTNESS, STYLE_HIGH_CONTRAST)
DEFAULT_STYLE = STYLE_NORMAL

# theme
LIGHT_THEME = "light"
DARK_THEME = "dark"
SYSTEM_THEME = "system"

# upload
SUPPORTED_MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}
SUPPORTED_DECODED_FORMATS = {"JPEG": "image/jpeg", "PNG": "image/png"}
PREVIEW_THUMBNAIL_SIZE = (240, 240)

# service
DEFAULT_SERVICE_URL = "http://localhost:8080/"
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0

# timings (ms)
CLIPBOARD_FEEDBACK_DELAY_MS = 1500
QUEUE_POLL_INTERVAL_MS = 40
