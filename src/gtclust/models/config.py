"""
Pydantic configuration model for gtclust.

Configuration can be loaded from a YAML file and overridden by CLI
arguments.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from gtclust.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ClusterConfig(BaseModel):
    """
    Settings for tree ingest, threshold clustering and table output.

    Attributes:
        workers: Number of threads used to cluster thresholds concurrently.
            Each thread works on its own copy of the collapsed graph.
        missing_branch_length: Branch length assigned to branches that carry
            no length in the Newick file.
        separator: Field separator of the output table.
    """

    workers: int = Field(
        default=1,
        ge=1,
        description="Threads used for per-threshold clustering",
    )
    missing_branch_length: float = Field(
        default=0.0,
        ge=0,
        description="Branch length used where the Newick file gives none",
    )
    separator: str = Field(
        default="\t",
        description="Field separator of the output table",
    )

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, value: str) -> str:
        """Polars only supports single-byte separators."""
        if len(value) != 1:
            msg = f"separator must be a single character, got {value!r}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_yaml(cls, path: Path) -> ClusterConfig:
        """
        Load configuration from a YAML file.

        Unknown keys are ignored (forward compatibility).

        Args:
            path: Path to YAML configuration file.

        Returns:
            ClusterConfig populated from YAML values merged with defaults.

        Raises:
            ConfigurationError: If the file is missing, is not a mapping,
                or contains invalid values.
        """
        import yaml

        if not path.exists():
            raise ConfigurationError(
                f"Config file not found: {path}",
                suggestion="Check the --config path.",
            )

        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Config file is not valid YAML: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"YAML config must be a mapping, got {type(raw).__name__}"
            )

        known = {k: v for k, v in raw.items() if k in cls.model_fields}
        unknown = sorted(set(raw) - set(known))
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        try:
            return cls(**known)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {path}: {e}",
                suggestion="workers must be >= 1 and missing_branch_length >= 0.",
            ) from e

    def merged(self, **overrides: Any) -> ClusterConfig:
        """Return a copy with the non-None overrides applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return self.model_validate({**self.model_dump(), **updates})

    model_config = {"frozen": True}
