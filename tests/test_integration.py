"""Integration tests for loading configuration end to end."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from cfgstore import ConfigAlreadyExists
from cfgstore import ConfigBase
from cfgstore import ConfigErrors
from cfgstore import ConfigStoreSet
from cfgstore import DeserializationFailed
from cfgstore import DirectoryKind
from cfgstore import NoConfigurationAvailable
from cfgstore import NormalizeContext
from cfgstore import init_config
from cfgstore import load_cli_config
from cfgstore import load_config
from cfgstore import load_default_config
from cfgstore import load_project_config
from cfgstore.sandbox import SandboxDirs


@dataclass
class AcmeConfig(ConfigBase):
    username: str = ""
    theme: str = ""

    def normalize(self, context: NormalizeContext) -> None:
        if context.kind is DirectoryKind.CLI_CONFIG and not self.theme:
            self.theme = "light"


class TestConfigIntegration:
    """Integration tests for realistic configuration scenarios."""

    @pytest.fixture
    def sandbox(self):
        """Create a sandbox for user 'alice' working in ~/projects/site."""
        with TemporaryDirectory() as tmpdir:
            yield SandboxDirs(root=Path(tmpdir), username="alice", project_dir="projects/site")

    @pytest.fixture
    def stores(self, sandbox):
        return ConfigStoreSet("acme", "config.json", dirs=sandbox.provider())

    def test_cli_config_without_project_config(self, sandbox, stores):
        """Test the CLI config is used as-is and no project file is written."""
        cli_file = stores.cli_store().filepath()
        cli_file.parent.mkdir(parents=True)
        cli_file.write_text(json.dumps({"username": "alice", "theme": "dark"}))

        config = load_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider())

        assert config == AcmeConfig(username="alice", theme="dark")
        assert not (sandbox.project() / ".acme" / "config.json").exists()

    def test_first_run_creates_cli_defaults(self, sandbox, stores):
        """Test a first run persists normalized defaults for the next run."""
        config = load_default_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider())

        assert config == AcmeConfig(theme="light")
        saved = json.loads(stores.cli_store().filepath().read_text())
        assert saved == {"username": "", "theme": "light"}

    def test_project_overrides_user_settings(self, sandbox, stores):
        """Test a project pins its theme while inheriting the user's name."""
        stores.cli_store().save_json(AcmeConfig(username="alice", theme="light"))
        stores.project_store().save_json({"theme": "dark"})

        config = load_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider())

        assert config == AcmeConfig(username="alice", theme="dark")

    def test_init_project_config_then_load(self, sandbox, stores):
        """Test initializing a project config and picking it up on the next load."""
        stores.cli_store().save_json(AcmeConfig(username="alice", theme="light"))

        project = stores.project_store()
        init_config(AcmeConfig, project)
        assert project.exists()

        project.save_json(AcmeConfig(theme="dark"))
        config = load_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider())
        assert config == AcmeConfig(username="alice", theme="dark")

    def test_init_existing_project_config(self, stores):
        project = stores.project_store()
        project.save_json(AcmeConfig(username="bob"))

        with pytest.raises(ConfigAlreadyExists):
            init_config(AcmeConfig, project)

        assert project.load_json() == {"username": "bob", "theme": ""}

    def test_project_only_without_file(self, sandbox):
        with pytest.raises(NoConfigurationAvailable):
            load_project_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider())

    def test_cli_only_ignores_project(self, sandbox, stores):
        stores.project_store().save_json({"username": "project-user"})

        config = load_cli_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider())

        assert config == AcmeConfig(theme="light")

    def test_corrupt_cli_config_is_reported(self, sandbox, stores):
        stores.cli_store().save(b"{")
        stores.project_store().save_json({"theme": "dark"})

        with pytest.raises(ConfigErrors) as exc_info:
            load_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider())

        assert exc_info.value.matches(DeserializationFailed)

    def test_app_config_store_in_nested_file(self, sandbox):
        """Test app config with a file in a subdirectory of the config dir."""
        config = load_config(
            AcmeConfig,
            "acme",
            "profiles/default.json",
            kinds=[DirectoryKind.APP_CONFIG],
            dirs=sandbox.provider(),
        )

        assert config == AcmeConfig()
        assert (sandbox.user_config_dir() / "acme" / "profiles" / "default.json").exists()

    def test_injected_logger_receives_messages(self, sandbox, caplog):
        app_logger = logging.getLogger("acme.config")

        with caplog.at_level(logging.INFO, logger="acme.config"):
            load_config(AcmeConfig, "acme", "config.json", dirs=sandbox.provider(), logger=app_logger)

        assert any(record.name == "acme.config" for record in caplog.records)
        assert "Created default cli config" in caplog.text
