"""Font catalog used to style exported flashcards."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from urllib.parse import quote_plus


logger = logging.getLogger(__name__)

DEFAULT_FONT_STACK = "Arial, sans-serif"
GOOGLE_FONTS_URL = "https://fonts.googleapis.com/css2?family={family}:wght@400;600;700&display=swap"


@dataclass(frozen=True, slots=True)
class FontSpec:
    """A font offered to authors."""

    name: str
    display_name: str
    is_system: bool


FONT_CATALOG: tuple[FontSpec, ...] = (
    FontSpec("Arial", "Arial", True),
    FontSpec("Helvetica", "Helvetica", True),
    FontSpec("Georgia", "Georgia (Serif)", True),
    FontSpec("Times New Roman", "Times New Roman (Serif)", True),
    FontSpec("Courier New", "Courier New (Monospace)", True),
    FontSpec("Roboto", "Roboto", False),
    FontSpec("Open Sans", "Open Sans", False),
    FontSpec("Lato", "Lato", False),
    FontSpec("Montserrat", "Montserrat", False),
    FontSpec("Merriweather", "Merriweather (Serif)", False),
    FontSpec("Playfair Display", "Playfair Display (Serif)", False),
    FontSpec("Source Sans Pro", "Source Sans Pro", False),
    FontSpec("Raleway", "Raleway", False),
    FontSpec("Noto Sans", "Noto Sans", False),
    FontSpec("PT Sans", "PT Sans", False),
)

_SYSTEM_STACKS = {
    "Arial": "Arial, Helvetica, sans-serif",
    "Helvetica": "Helvetica, Arial, sans-serif",
    "Times New Roman": '"Times New Roman", Times, serif',
    "Georgia": "Georgia, serif",
    "Courier New": '"Courier New", Courier, monospace',
}

_BY_NAME = {font.name: font for font in FONT_CATALOG}


def find_font(name: str | None) -> FontSpec | None:
    if not name:
        return None
    return _BY_NAME.get(name)


def resolve_css_stack(name: str | None) -> str:
    """Return the CSS ``font-family`` value for a catalog font name."""
    if not name:
        return DEFAULT_FONT_STACK

    if name in _SYSTEM_STACKS:
        return _SYSTEM_STACKS[name]

    font = find_font(name)
    if font is not None and not font.is_system:
        return f'"{name}", sans-serif'

    return f'"{name}", Arial, sans-serif'


def is_system_font(name: str | None) -> bool:
    """Return whether ``name`` is always available; unknown fonts are not."""
    font = find_font(name)
    return font.is_system if font is not None else False


def font_stylesheet_url(name: str) -> str:
    """Return the remote stylesheet serving ``name``."""
    return GOOGLE_FONTS_URL.format(family=quote_plus(name.strip()))


class FontLoadCache:
    """Remember which remote font stylesheets have already been requested.

    Owned by the caller: create one per export session, or share one across a
    process and call :meth:`reset` periodically to bound its growth.
    """

    def __init__(self) -> None:
        self._links: dict[str, str] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._links

    def __len__(self) -> int:
        return len(self._links)

    @property
    def links(self) -> list[str]:
        """Stylesheet URLs in the order they were first requested."""
        return list(self._links.values())

    def add(self, name: str, url: str) -> bool:
        if name in self._links:
            return False
        self._links[name] = url
        return True

    def get(self, name: str) -> str | None:
        return self._links.get(name)

    def reset(self) -> None:
        self._links.clear()


def ensure_font_loaded(name: str | None, cache: FontLoadCache) -> str | None:
    """Register the stylesheet for a remote font and return its URL.

    System fonts and empty names return ``None``. Repeated calls for the same
    font return the recorded URL without registering it again.
    """
    if not name or is_system_font(name):
        return None
    existing = cache.get(name)
    if existing is not None:
        return existing
    url = font_stylesheet_url(name)
    cache.add(name, url)
    logger.debug("Registered remote font stylesheet for '%s': %s", name, url)
    return url


__all__ = [
    "DEFAULT_FONT_STACK",
    "FONT_CATALOG",
    "FontLoadCache",
    "FontSpec",
    "ensure_font_loaded",
    "find_font",
    "font_stylesheet_url",
    "is_system_font",
    "resolve_css_stack",
]
