"""Tests for the pydantic configuration model."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from gtclust.core.exceptions import ConfigurationError
from gtclust.models.config import ClusterConfig


class TestClusterConfigDefaults:
    """Tests for default values and validation."""

    def test_defaults(self) -> None:
        """Defaults run sequentially and write TSV."""
        config = ClusterConfig()

        assert config.workers == 1
        assert config.missing_branch_length == 0.0
        assert config.separator == "\t"

    def test_frozen(self) -> None:
        """Config is immutable."""
        config = ClusterConfig()
        with pytest.raises(ValidationError):
            config.workers = 4

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workers": 0},
            {"missing_branch_length": -1.0},
            {"separator": ""},
            {"separator": "::"},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        """Out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            ClusterConfig(**kwargs)

    def test_merged_applies_overrides(self) -> None:
        """Non-None overrides replace values; None leaves them alone."""
        config = ClusterConfig(missing_branch_length=0.5)
        merged = config.merged(workers=3, separator=None)

        assert merged.workers == 3
        assert merged.missing_branch_length == 0.5
        assert merged.separator == "\t"

    def test_merged_without_overrides_returns_self(self) -> None:
        config = ClusterConfig()
        assert config.merged(workers=None) is config


class TestClusterConfigYaml:
    """Tests for loading configuration from YAML."""

    def test_from_yaml(self, tmp_path: Path) -> None:
        """Known keys are loaded."""
        path = tmp_path / "config.yaml"
        path.write_text("workers: 4\nmissing_branch_length: 0.01\nseparator: ','\n")

        config = ClusterConfig.from_yaml(path)

        assert config.workers == 4
        assert config.missing_branch_length == 0.01
        assert config.separator == ","

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        """Unknown keys are dropped for forward compatibility."""
        path = tmp_path / "config.yaml"
        path.write_text("workers: 2\nfuture_option: true\n")

        assert ClusterConfig.from_yaml(path).workers == 2

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert ClusterConfig.from_yaml(path) == ClusterConfig()

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        """A YAML list is not a valid config."""
        path = tmp_path / "config.yaml"
        path.write_text("- workers\n- 4\n")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ClusterConfig.from_yaml(path)

    def test_invalid_value_rejected(self, tmp_path: Path) -> None:
        """Validation failures surface as ConfigurationError."""
        path = tmp_path / "config.yaml"
        path.write_text("workers: 0\n")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ClusterConfig.from_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            ClusterConfig.from_yaml(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("workers: [1, 2\n")

        with pytest.raises(ConfigurationError, match="not valid YAML"):
            ClusterConfig.from_yaml(path)
