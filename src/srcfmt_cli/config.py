import codecs
import logging
import tomllib
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from srcfmt.errors import ConfigurationError, InvalidArgumentError
from srcfmt.models import FormatterConfiguration, LineSeparator, default_encoding

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(".srcfmt.toml")
PROFILE_FILE_NAME = "formatter-profile.xml"


def home_profile_path() -> Path:
    """Per-user default profile, used when no profile is configured explicitly"""
    return Path.home() / PROFILE_FILE_NAME


class ProjectSettings(BaseModel):
    """The [tool.srcfmt] table of a project configuration file"""

    model_config = ConfigDict(extra="forbid")

    conf: Optional[Path] = None
    level: Optional[str] = None
    header: Optional[Path] = None
    encoding: Optional[str] = None
    linesep: Optional[str] = None
    exclude: List[str] = Field(default_factory=list)
    jobs: Optional[int] = Field(default=None, ge=1)


def load_project_settings(config_path: Optional[Path]) -> ProjectSettings:
    """Load project settings; a missing file means defaults."""
    if config_path is None or not config_path.exists():
        return ProjectSettings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"cannot read configuration file {config_path}: {e}") from e

    try:
        settings = ProjectSettings(**data.get("tool", {}).get("srcfmt", {}))
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration file {config_path}: {e}") from e

    # Paths in the file are relative to the file itself
    base = config_path.parent
    return settings.model_copy(
        update={
            "conf": base / settings.conf if settings.conf else None,
            "header": base / settings.header if settings.header else None,
        }
    )


def as_path(value: str) -> Path:
    """Accept a plain path or a file: URL."""
    parsed = urlparse(value)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    return Path(value)


def parse_line_separator(value: str) -> LineSeparator:
    try:
        return LineSeparator(value.lower())
    except ValueError:
        raise InvalidArgumentError("linesep : must be one of ['lf', 'cr', 'crlf']") from None


def check_encoding(name: str) -> str:
    try:
        return codecs.lookup(name).name
    except LookupError:
        raise InvalidArgumentError(f"encoding : unknown charset {name!r}") from None


def resolve_profile(conf: Optional[str], project: ProjectSettings) -> Optional[Path]:
    """Command line profile, then project profile, then the home directory profile."""
    if conf is not None:
        path = as_path(conf)
        logger.info("Using command line configuration %s", path)
    elif project.conf is not None:
        path = project.conf
        logger.info("Using project configuration %s", path)
    elif home_profile_path().exists():
        path = home_profile_path()
        logger.info("Using home directory configuration at %s", path)
    else:
        logger.info(
            "No command line configuration parameter found, nor home directory configuration of %s. "
            "Using default formatting",
            home_profile_path(),
        )
        return None

    if not path.is_file():
        raise ConfigurationError(f"formatter profile not found: {path}")
    return path.resolve()


def read_header(path: Path, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read header file {path}: {e}") from e


def resolve_configuration(
    conf: Optional[str] = None,
    level: Optional[str] = None,
    header: Optional[Path] = None,
    encoding: Optional[str] = None,
    linesep: Optional[str] = None,
    project: Optional[ProjectSettings] = None,
) -> FormatterConfiguration:
    """Build the immutable run configuration; command line values win over project ones."""
    project = project or ProjectSettings()

    linesep = linesep if linesep is not None else project.linesep
    line_separator = parse_line_separator(linesep) if linesep is not None else LineSeparator.platform_default()

    encoding = encoding or project.encoding
    encoding = check_encoding(encoding) if encoding else default_encoding()

    header_path = header or project.header
    header_text = read_header(header_path, encoding) if header_path else None

    return FormatterConfiguration(
        profile=resolve_profile(conf, project),
        source_level=level or project.level,
        encoding=encoding,
        line_separator=line_separator,
        header=header_text,
    )
