"""Unit tests for path helper functions."""

from pathlib import Path

from zksync_deploy.paths import (
    get_artifact_path,
    get_default_artifacts_dir,
    get_default_config_path,
)


class TestDefaultPaths:
    """Test the default path helpers."""

    def test_default_config_path_in_cwd(self, tmp_path: Path, monkeypatch):
        """Test that the default config file lives in the working directory."""
        monkeypatch.chdir(tmp_path)
        assert get_default_config_path() == tmp_path / "zksync.config.json"

    def test_default_artifacts_dir_in_cwd(self, tmp_path: Path, monkeypatch):
        """Test that the default artifacts directory lives in the working directory."""
        monkeypatch.chdir(tmp_path)
        assert get_default_artifacts_dir() == tmp_path / "artifacts-zk"

    def test_default_paths_are_absolute(self):
        """Test that returned paths are absolute."""
        assert get_default_config_path().is_absolute()
        assert get_default_artifacts_dir().is_absolute()


class TestGetArtifactPath:
    """Test the get_artifact_path function."""

    def test_layout_is_source_then_contract(self, tmp_path: Path):
        """Test that artifacts are stored under their source file directory."""
        path = get_artifact_path("contracts/Greeter.sol", "Greeter", tmp_path)
        assert path == tmp_path / "contracts" / "Greeter.sol" / "Greeter.json"

    def test_relative_root_is_made_absolute(self, tmp_path: Path, monkeypatch):
        """Test that a relative artifacts root is resolved against the cwd."""
        monkeypatch.chdir(tmp_path)
        path = get_artifact_path("A.sol", "A", "out")
        assert path.is_absolute()
        assert path == tmp_path / "out" / "A.sol" / "A.json"

    def test_uses_default_root(self, tmp_path: Path, monkeypatch):
        """Test that the default artifacts directory is used when no root is given."""
        monkeypatch.chdir(tmp_path)
        path = get_artifact_path("A.sol", "A")
        assert path == tmp_path / "artifacts-zk" / "A.sol" / "A.json"
