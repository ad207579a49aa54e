"""Tests for the pwm CLI.

Tests cover:
- Generating passwords and checksums
- Managing profiles (list, show, add, delete, select, set, check)
- Settings file handling
"""

import pytest
import yaml
from click.testing import CliRunner

from password_maker.cli.main import cli
from password_maker.profiles.base import ALPHANUMERIC_ALPHABET, ProfileBuilder
from password_maker.profiles.loader import SettingsLoader
from password_maker.profiles.store import ProfileStore

URL = "https://www.example.com/login"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings_file(tmp_path):
    """Settings with two profiles, the first one active."""
    path = tmp_path / "passwordmaker.yaml"
    store = ProfileStore(
        [
            ProfileBuilder("web").alphabet(ALPHANUMERIC_ALPHABET).build(),
            ProfileBuilder("bank").hash_algorithm("sha256").length(20).build(),
        ]
    )
    SettingsLoader().save_file(store, path)
    return path


@pytest.fixture
def pwm(runner, settings_file):
    """Invoke the CLI against the temporary settings file."""

    def invoke(*args, **kwargs):
        return runner.invoke(cli, ["--settings", str(settings_file), *args], **kwargs)

    return invoke


def saved(settings_file):
    return yaml.safe_load(settings_file.read_text(encoding="utf-8"))


# =============================================================================
# Generation Tests
# =============================================================================

class TestGenerate:
    """Tests for the generate command."""

    def test_generate(self, pwm):
        result = pwm("generate", URL, "--master", "master")

        assert result.exit_code == 0
        assert result.stdout.strip() == "EYZCCCtH"

    def test_generate_prompts_for_master(self, pwm):
        result = pwm("generate", URL, input="master\n")

        assert result.exit_code == 0
        assert result.stdout.strip().splitlines()[-1] == "EYZCCCtH"
        assert "master" not in result.stdout.splitlines()[0]

    def test_generate_with_named_profile(self, pwm, settings_file):
        result = pwm("generate", URL, "-m", "master", "--profile", "bank")

        assert result.exit_code == 0
        assert len(result.stdout.strip()) == 20
        assert saved(settings_file)["active_index"] == 0

    def test_generate_unknown_profile(self, pwm):
        result = pwm("generate", URL, "-m", "master", "-p", "nope")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_generate_settings_error(self, pwm):
        pwm("profiles", "set", "hash_algorithm", "sha3")

        result = pwm("generate", URL, "-m", "master")

        assert result.exit_code == 1
        assert "Unknown hash algorithm" in result.output

    def test_generate_without_profiles_uses_default(self, pwm):
        pwm("profiles", "delete", "--yes")
        pwm("profiles", "delete", "--yes")

        result = pwm("generate", URL, "-m", "master")

        assert result.exit_code == 0
        assert result.stdout.strip().splitlines()[-1] == "GUqGU$`V"

    def test_missing_settings_uses_default_profile(self, runner, tmp_path):
        path = tmp_path / "absent.yaml"
        result = runner.invoke(cli, ["--settings", str(path), "generate", URL, "-m", "master"])

        assert result.exit_code == 0
        assert result.stdout.strip().splitlines()[-1] == "GUqGU$`V"

    def test_verify(self, pwm):
        result = pwm("verify", "-m", "master")

        assert result.exit_code == 0
        assert result.stdout.strip() == "isT"

    def test_used_text(self, pwm):
        result = pwm("used-text", "https://user@shop.example.com:8080/cart")

        assert result.exit_code == 0
        assert result.stdout.strip() == "shop.example.com"

    def test_algorithms(self, pwm):
        result = pwm("algorithms")

        assert result.exit_code == 0
        for name in ("md4", "md5", "sha1", "sha256", "ripemd160", "BeforeAndAfter"):
            assert name in result.stdout


# =============================================================================
# Profile Management Tests
# =============================================================================

class TestProfiles:
    """Tests for the profiles command group."""

    def test_list(self, pwm):
        result = pwm("profiles", "list")

        assert result.exit_code == 0
        assert "web" in result.stdout
        assert "bank" in result.stdout
        assert "*" in result.stdout

    def test_show(self, pwm):
        result = pwm("profiles", "show")

        assert result.exit_code == 0
        assert "hash_algorithm" in result.stdout
        assert "'web'" in result.stdout

    def test_add(self, pwm, settings_file):
        result = pwm("profiles", "add", "mail", "-a", "sha1", "-l", "12", "--leet-mode", "after", "--leet-level", "2")

        assert result.exit_code == 0
        data = saved(settings_file)
        assert [p["name"] for p in data["profiles"]] == ["web", "bank", "mail"]
        assert data["active_index"] == 2
        mail = data["profiles"][2]
        assert mail["hash_algorithm"] == "sha1"
        assert mail["password_length"] == 12
        assert mail["leet_mode"] == "After"
        assert mail["leet_level"] == 2

    def test_add_reports_warnings(self, pwm):
        result = pwm("profiles", "add", "weak", "--alphabet", "x")

        assert result.exit_code == 0
        assert "WARNING" in result.stdout

    def test_add_invalid(self, pwm, settings_file):
        result = pwm("profiles", "add", "bad", "--length=-4")

        assert result.exit_code == 1
        assert len(saved(settings_file)["profiles"]) == 2

    def test_delete(self, pwm, settings_file):
        result = pwm("profiles", "delete", "--yes")

        assert result.exit_code == 0
        data = saved(settings_file)
        assert [p["name"] for p in data["profiles"]] == ["bank"]
        assert data["active_index"] == 0

    def test_delete_asks_for_confirmation(self, pwm, settings_file):
        result = pwm("profiles", "delete", input="n\n")

        assert result.exit_code == 1
        assert len(saved(settings_file)["profiles"]) == 2

    @pytest.mark.parametrize(
        "target,expected",
        [("1", 1), ("bank", 1), ("web", 0), ("99", 1)],
    )
    def test_select(self, pwm, settings_file, target, expected):
        result = pwm("profiles", "select", target)

        assert result.exit_code == 0
        assert saved(settings_file)["active_index"] == expected

    def test_select_negative_index_selects_last(self, pwm, settings_file):
        result = pwm("profiles", "select", "--", "-1")

        assert result.exit_code == 0
        assert saved(settings_file)["active_index"] == 1

    def test_select_unknown_name(self, pwm):
        result = pwm("profiles", "select", "nope")

        assert result.exit_code == 1

    def test_set(self, pwm, settings_file):
        assert pwm("profiles", "set", "password_length", "16").exit_code == 0
        assert pwm("profiles", "set", "use_protocol", "true").exit_code == 0
        assert pwm("profiles", "set", "url_mode", "all").exit_code == 0

        profile = saved(settings_file)["profiles"][0]
        assert profile["password_length"] == 16
        assert profile["use_protocol"] is True
        assert profile["url_mode"] == "all"

    def test_set_leet_level_word(self, pwm, settings_file):
        assert pwm("profiles", "set", "leet_level", "Seven").exit_code == 0
        assert saved(settings_file)["profiles"][0]["leet_level"] == 7

        assert pwm("profiles", "set", "leet_level", "").exit_code == 0
        assert saved(settings_file)["profiles"][0]["leet_level"] is None

    def test_set_invalid_value(self, pwm, settings_file):
        result = pwm("profiles", "set", "password_length", "many")

        assert result.exit_code == 1
        assert saved(settings_file)["profiles"][0]["password_length"] == 8

    def test_set_unknown_field(self, pwm):
        result = pwm("profiles", "set", "colour", "blue")

        assert result.exit_code == 2

    def test_set_changes_generated_password(self, pwm):
        before = pwm("generate", URL, "-m", "master").stdout.strip()
        pwm("profiles", "set", "modifier", "v2")
        after = pwm("generate", URL, "-m", "master").stdout.strip()

        assert before != after

    def test_set_without_profiles(self, pwm):
        pwm("profiles", "delete", "--yes")
        pwm("profiles", "delete", "--yes")

        result = pwm("profiles", "set", "password_length", "12")

        assert result.exit_code == 1
        assert "No profile is selected" in result.output

    def test_check_valid(self, pwm):
        result = pwm("profiles", "check")

        assert result.exit_code == 0
        assert "VALID" in result.stdout
        assert "INVALID" not in result.stdout

    def test_check_invalid(self, pwm):
        pwm("profiles", "set", "hash_algorithm", "sha3")

        result = pwm("profiles", "check")

        assert result.exit_code == 1
        assert "INVALID" in result.stdout
        assert "Unknown hash algorithm" in result.stdout
