"""Runtime configuration for contract checks.

Values come from CLI options, then ``CONTRACT_GATE_*`` environment
variables, then an optional ``contract-gate.yaml`` in the working directory.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_FILE = "contract-gate.yaml"


class Settings(BaseSettings):
    """Where module bundles live and how endpoints are compared."""

    model_config = SettingsConfigDict(env_prefix="CONTRACT_GATE_", yaml_file=CONFIG_FILE)

    modules_root: Path = Field(
        default=Path("contract_output") / "modules",
        description="Directory holding one sub-directory per module bundle.",
    )
    baseline_root: Path = Field(
        default=Path("contract_baseline") / "modules",
        description="Directory mirroring modules_root with accepted openapi.json snapshots.",
    )
    normalize_path_params: bool = Field(
        default=False,
        description="Treat ':id' path segments as '{id}' when comparing endpoints.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, YamlConfigSettingsSource(settings_cls))


def load_settings(**overrides) -> Settings:
    """Build settings, letting non-None overrides win over env and file values."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
