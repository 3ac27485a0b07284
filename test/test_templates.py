"""Tests for the template environment and YAML filters."""

import tempfile
from pathlib import Path

import pytest
import yaml

from espgen.templates import SECRET_PREFIX, credential, get_env, is_secret, quote


class TestQuote:
    """Test double-quoted scalar rendering."""

    def test_plain(self):
        assert quote("Fan") == '"Fan"'

    def test_embedded_quotes_escaped(self):
        assert quote('say "hi"') == '"say \\"hi\\""'

    def test_backslash_escaped(self):
        assert quote("a\\b") == '"a\\\\b"'

    def test_empty(self):
        assert quote("") == '""'

    @pytest.mark.parametrize(
        "value",
        ["a\nb", "tab\there", "trailing \\", "door # x", "key: value", "caf\u00e9", "\x07bell"],
    )
    def test_loads_back_unchanged(self, value):
        text = quote(value)
        assert "\n" not in text
        assert yaml.safe_load(f"v: {text}") == {"v": value}


class TestCredential:
    """Test secret reference handling."""

    def test_secret_prefix(self):
        assert SECRET_PREFIX == "!secret "

    @pytest.mark.parametrize("value", ["!secret wifi_ssid", "!secret my_password"])
    def test_secret_unquoted(self, value):
        assert is_secret(value)
        assert credential(value) == value

    @pytest.mark.parametrize("value", ["home-network", "!secretive", "my !secret thing", ""])
    def test_literal_quoted(self, value):
        assert not is_secret(value)
        assert credential(value) == quote(value)


class TestTemplateEnv:
    """Test Jinja2 template environment."""

    def test_get_env(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            templates_dir = Path(tmpdir)
            (templates_dir / "test.j2").write_text("name: {{ name | quote }}\n")

            env = get_env(templates_dir)
            result = env.get_template("test.j2").render(name="World")
            assert result == 'name: "World"\n'

    def test_multiple_directories(self):
        with tempfile.TemporaryDirectory() as first, tempfile.TemporaryDirectory() as second:
            (Path(first) / "a.j2").write_text("a")
            (Path(second) / "b.j2").write_text("b")

            env = get_env([Path(first), Path(second)])
            assert env.get_template("a.j2").render() == "a"
            assert env.get_template("b.j2").render() == "b"

    def test_block_lines_trimmed(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            templates_dir = Path(tmpdir)
            (templates_dir / "t.j2").write_text(
                "a: 1\n  {% if flag %}\nb: 2\n{% endif %}\nc: 3\n"
            )

            env = get_env(templates_dir)
            assert env.get_template("t.j2").render(flag=True) == "a: 1\nb: 2\nc: 3\n"
            assert env.get_template("t.j2").render(flag=False) == "a: 1\nc: 3\n"

    def test_credential_filter(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            templates_dir = Path(tmpdir)
            (templates_dir / "t.j2").write_text("{{ value | credential }}")

            env = get_env(templates_dir)
            template = env.get_template("t.j2")
            assert template.render(value="!secret pw") == "!secret pw"
            assert template.render(value="pw") == '"pw"'
