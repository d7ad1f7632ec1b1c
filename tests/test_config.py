"""
Tests for configuration loading — environment file parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from setup_coding.core.config.loader import ConfigError, load_environment
from setup_coding.core.models.environment import ToolOptions


@pytest.fixture
def valid_yaml(tmp_path: Path) -> Path:
    """Create a valid environment.yml in a temp directory."""
    content = textwrap.dedent("""\
        updates:
          system: true
          dependencies: true

        tools:
          git: true
          gh: true
          docker_compose:
            version: "2.24.0"
          code: false

        keys:
          ssh:
            algorithm: ed25519
            email: dev@example.com
            title: laptop
    """)
    path = tmp_path / "environment.yml"
    path.write_text(content)
    return path


@pytest.fixture
def valid_toml(tmp_path: Path) -> Path:
    """The same environment in TOML."""
    content = textwrap.dedent("""\
        [updates]
        system = true
        cleanup = true

        [tools]
        git = "latest"
        rustc = true

        [keys.ssh]
        algorithm = "rsa"
        email = "dev@example.com"
    """)
    path = tmp_path / "environment.toml"
    path.write_text(content)
    return path


class TestLoadEnvironment:
    def test_load_yaml(self, valid_yaml: Path):
        env = load_environment(valid_yaml)
        assert env.updates.system
        assert env.updates.dependencies
        assert not env.updates.cleanup
        assert env.requested_tools() == [
            ("git", ToolOptions()),
            ("gh", ToolOptions()),
            ("docker-compose", ToolOptions(version="2.24.0")),
        ]
        assert env.keys.ssh.algorithm == "ed25519"
        assert env.keys.ssh.title == "laptop"
        assert env.keys.ssh.key_dir == "~/.ssh"
        assert not env.keys.ssh.upload

    def test_load_toml(self, valid_toml: Path):
        env = load_environment(valid_toml)
        assert env.updates.cleanup
        assert [name for name, _ in env.requested_tools()] == ["git", "rustc"]
        assert env.keys.ssh.algorithm == "rsa"
        assert env.keys.ssh.title is None

    def test_empty_file_is_nothing_to_do(self, tmp_path: Path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        env = load_environment(path)
        assert env.updates is None
        assert env.keys is None
        assert env.requested_tools() == []

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_environment(tmp_path / "nope.yml")

    def test_directory_is_not_a_config(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_environment(tmp_path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yml"
        path.write_text("tools: [git\n  docker: :")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_environment(path)

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text("[tools\ngit = true")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_environment(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yml"
        path.write_text("- git\n- docker\n")
        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_environment(path)

    def test_schema_violation(self, tmp_path: Path):
        path = tmp_path / "env.yml"
        path.write_text("keys:\n  ssh:\n    algorithm: ed25519\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_environment(path)

    def test_unknown_tool(self, tmp_path: Path):
        path = tmp_path / "env.yml"
        path.write_text("tools:\n  git: true\n  vim: true\n")
        with pytest.raises(ConfigError, match=r"Unknown tool\(s\) in .*: vim"):
            load_environment(path)

    def test_hyphenated_and_underscored_names_agree(self, tmp_path: Path):
        path = tmp_path / "env.yml"
        path.write_text("tools:\n  brave_browser: true\n  docker-compose: true\n")
        env = load_environment(path)
        assert [name for name, _ in env.requested_tools()] == ["brave-browser", "docker-compose"]
