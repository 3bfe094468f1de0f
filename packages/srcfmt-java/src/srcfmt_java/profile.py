"""
Eclipse formatter profile reader.

Accepts the XML export of the Eclipse formatter preferences page
(``<profiles><profile kind="CodeFormatterProfile"><setting id=... value=.../>``)
as well as a workspace ``org.eclipse.jdt.core.prefs`` properties file.
Only the settings the Java engine acts on are extracted.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
from xml.etree import ElementTree

from srcfmt.errors import ConfigurationError

TAB_CHAR = "org.eclipse.jdt.core.formatter.tabulation.char"
TAB_SIZE = "org.eclipse.jdt.core.formatter.tabulation.size"
EMPTY_LINES_TO_PRESERVE = "org.eclipse.jdt.core.formatter.number_of_empty_lines_to_preserve"
COMPILER_SOURCE = "org.eclipse.jdt.core.compiler.source"

TAB_CHAR_VALUES = ("space", "tab", "mixed")


@dataclass(frozen=True)
class ProfileSettings:
    """Formatter settings, with Eclipse's built-in defaults."""

    name: Optional[str] = None
    tab_char: str = "tab"
    tab_size: int = 4
    blank_lines_to_preserve: int = 1
    source_level: Optional[str] = None


def load_profile(path: Path) -> ProfileSettings:
    path = Path(path)
    try:
        if path.suffix == ".prefs":
            name, settings = None, _read_prefs(path)
        else:
            name, settings = _read_xml(path)
    except (OSError, UnicodeDecodeError, ElementTree.ParseError) as e:
        raise ConfigurationError(f"cannot read formatter profile {path}: {e}") from e

    return _to_settings(path, name, settings)


def _read_xml(path: Path) -> tuple[Optional[str], Dict[str, str]]:
    root = ElementTree.parse(path).getroot()
    if root.tag == "profile":
        profiles = [root]
    else:
        profiles = root.findall("profile")
    if not profiles:
        raise ConfigurationError(f"no formatter profile found in {path}")

    profile = next(
        (p for p in profiles if p.get("kind") == "CodeFormatterProfile"), profiles[0]
    )
    settings = {
        s.get("id"): s.get("value", "")
        for s in profile.iter("setting")
        if s.get("id")
    }
    return profile.get("name"), settings


def _read_prefs(path: Path) -> Dict[str, str]:
    settings = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "!")) or "=" not in line:
            continue
        key, value = line.split("=", 1)
        settings[key.strip()] = value.strip()
    return settings


def _to_settings(path: Path, name: Optional[str], settings: Dict[str, str]) -> ProfileSettings:
    defaults = ProfileSettings()

    tab_char = settings.get(TAB_CHAR, defaults.tab_char)
    if tab_char not in TAB_CHAR_VALUES:
        raise ConfigurationError(f"{path}: {TAB_CHAR} must be one of {list(TAB_CHAR_VALUES)}")

    return ProfileSettings(
        name=name,
        tab_char=tab_char,
        tab_size=_positive_int(path, settings, TAB_SIZE, defaults.tab_size),
        blank_lines_to_preserve=_positive_int(
            path, settings, EMPTY_LINES_TO_PRESERVE, defaults.blank_lines_to_preserve, allow_zero=True
        ),
        source_level=settings.get(COMPILER_SOURCE) or None,
    )


def _positive_int(
    path: Path, settings: Dict[str, str], key: str, default: int, allow_zero: bool = False
) -> int:
    raw = settings.get(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{path}: {key} is not an integer: {raw!r}") from None
    if value < 0 or (value == 0 and not allow_zero):
        raise ConfigurationError(f"{path}: {key} is out of range: {value}")
    return value
