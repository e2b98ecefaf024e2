"""Tests for the --version string."""

from unittest.mock import patch

from indentnav import version


def test_no_git_lookup_outside_own_checkout(tmp_path):
    package_dir = tmp_path / "site-packages" / "indentnav"
    package_dir.mkdir(parents=True)
    # A repository further up must not be picked up
    (tmp_path / ".git").mkdir()
    with patch("indentnav.version.subprocess.check_output") as check_output:
        assert version._git_commit(package_dir) is None
    check_output.assert_not_called()


def test_git_commit_read_from_own_checkout(tmp_path):
    package_dir = tmp_path / "indentnav"
    package_dir.mkdir()
    (tmp_path / ".git").mkdir()
    with patch("indentnav.version.subprocess.check_output", return_value=b"abc1234\n") as check_output:
        assert version._git_commit(package_dir) == "abc1234"
    assert check_output.call_args.kwargs["cwd"] == str(tmp_path)


def test_version_string_without_commit():
    with patch("indentnav.version._installed_version", return_value="0.1.0"), \
            patch("indentnav.version._git_commit", return_value=None):
        assert version.get_version_string() == "0.1.0"
