import pytest
from srcfmt.errors import ConfigurationError
from srcfmt.models import FormatterConfiguration
from srcfmt.registry import FormatterKind, create_formatters


def test_all_formatters_in_registration_order():
    formatters = create_formatters(FormatterConfiguration())
    assert [f.name for f in formatters] == [kind.value for kind in FormatterKind]


def test_select_formatters():
    assert create_formatters(FormatterConfiguration(), kinds=[]) == []
    assert [f.name for f in create_formatters(FormatterConfiguration(), kinds=[FormatterKind.JAVA])] == ["java"]


def test_broken_profile_fails_before_traversal(tmp_path):
    profile = tmp_path / "profile.xml"
    profile.write_text("<profiles><profile>")

    with pytest.raises(ConfigurationError):
        create_formatters(FormatterConfiguration(profile=profile))
