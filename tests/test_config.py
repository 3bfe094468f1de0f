import pytest
from pydantic import ValidationError
from srcfmt.errors import ConfigurationError, InvalidArgumentError
from srcfmt.models import LineSeparator
from srcfmt_cli import config as config_module
from srcfmt_cli.config import (
    ProjectSettings,
    as_path,
    check_encoding,
    load_project_settings,
    parse_line_separator,
    resolve_configuration,
    resolve_profile,
)


@pytest.fixture
def home_profile(tmp_path, monkeypatch):
    path = tmp_path / "home" / "formatter-profile.xml"
    monkeypatch.setattr(config_module, "home_profile_path", lambda: path)
    return path


@pytest.mark.parametrize(
    "value, expected",
    [("lf", LineSeparator.LF), ("cr", LineSeparator.CR), ("crlf", LineSeparator.CRLF), ("CRLF", LineSeparator.CRLF)],
)
def test_parse_line_separator(value, expected):
    assert parse_line_separator(value) is expected


@pytest.mark.parametrize("value", ["tab", "", "\\n", "lfcr"])
def test_invalid_line_separator(value):
    with pytest.raises(InvalidArgumentError, match="linesep"):
        parse_line_separator(value)


def test_check_encoding():
    assert check_encoding("UTF8") == "utf-8"
    with pytest.raises(InvalidArgumentError, match="no-such-charset"):
        check_encoding("no-such-charset")


def test_profile_from_command_line(tmp_path, home_profile):
    profile = tmp_path / "team.xml"
    profile.write_text("<profiles/>")

    assert resolve_profile(str(profile), ProjectSettings()) == profile.resolve()
    assert resolve_profile(profile.as_uri(), ProjectSettings()) == profile.resolve()


def test_missing_command_line_profile_is_fatal(tmp_path, home_profile):
    with pytest.raises(ConfigurationError, match="not found"):
        resolve_profile(str(tmp_path / "missing.xml"), ProjectSettings())


def test_home_profile_used_by_default(home_profile):
    home_profile.parent.mkdir()
    home_profile.write_text("<profiles/>")

    assert resolve_profile(None, ProjectSettings()) == home_profile.resolve()


def test_no_profile_anywhere(home_profile):
    assert resolve_profile(None, ProjectSettings()) is None


def test_project_profile_beats_home_profile(tmp_path, home_profile):
    home_profile.parent.mkdir()
    home_profile.write_text("<profiles/>")
    project_profile = tmp_path / "project.xml"
    project_profile.write_text("<profiles/>")

    assert resolve_profile(None, ProjectSettings(conf=project_profile)) == project_profile.resolve()


def test_as_path_accepts_file_urls(tmp_path):
    assert as_path(tmp_path.as_uri()) == tmp_path
    assert as_path("relative/profile.xml").as_posix() == "relative/profile.xml"


def test_load_missing_project_settings(tmp_path):
    assert load_project_settings(tmp_path / ".srcfmt.toml") == ProjectSettings()
    assert load_project_settings(None) == ProjectSettings()


def test_load_project_settings(tmp_path):
    config_file = tmp_path / ".srcfmt.toml"
    config_file.write_text(
        "[tool.srcfmt]\n"
        'conf = "eclipse/profile.xml"\n'
        'header = "HEADER.txt"\n'
        'level = "11"\n'
        'linesep = "crlf"\n'
        'exclude = ["build", "*.gen.java"]\n'
        "jobs = 4\n"
    )

    settings = load_project_settings(config_file)

    assert settings.conf == tmp_path / "eclipse" / "profile.xml"
    assert settings.header == tmp_path / "HEADER.txt"
    assert settings.level == "11"
    assert settings.linesep == "crlf"
    assert settings.exclude == ["build", "*.gen.java"]
    assert settings.jobs == 4


@pytest.mark.parametrize(
    "content",
    ["[tool.srcfmt\n", "[tool.srcfmt]\nunknown = 1\n", "[tool.srcfmt]\njobs = 0\n"],
)
def test_invalid_project_settings(tmp_path, content):
    config_file = tmp_path / ".srcfmt.toml"
    config_file.write_text(content)

    with pytest.raises(ConfigurationError):
        load_project_settings(config_file)


def test_resolve_configuration_command_line_wins(tmp_path, home_profile):
    header = tmp_path / "HEADER.txt"
    header.write_text("// Copyright X\n", encoding="utf-8")
    project = ProjectSettings(level="8", linesep="cr", encoding="latin-1")

    config = resolve_configuration(level="17", header=header, encoding="utf-8", linesep="lf", project=project)

    assert config.source_level == "17"
    assert config.line_separator is LineSeparator.LF
    assert config.encoding == "utf-8"
    assert config.header == "// Copyright X\n"
    assert config.profile is None


def test_resolve_configuration_falls_back_to_project(home_profile):
    config = resolve_configuration(project=ProjectSettings(level="8", linesep="cr", encoding="latin-1"))

    assert config.source_level == "8"
    assert config.line_separator is LineSeparator.CR
    assert config.encoding == "iso8859-1"


def test_unreadable_header_is_fatal(tmp_path, home_profile):
    with pytest.raises(ConfigurationError, match="header"):
        resolve_configuration(header=tmp_path / "missing.txt", encoding="utf-8")


def test_configuration_is_immutable(home_profile):
    config = resolve_configuration(encoding="utf-8", linesep="lf")

    with pytest.raises(ValidationError):
        config.encoding = "ascii"
