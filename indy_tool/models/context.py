"""Context and configuration models for replay and migration runs."""

import os
from typing import Any, Dict, List, Mapping, Optional

from pydantic import Field, field_validator

from .base import IndyBaseModel
from ..utils.config_manager import ConfigManager
from ..utils.constants import (
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_PROXY_PASSWORD,
    DEFAULT_UPLOAD_DIR,
    DEFAULT_WORKERS,
    ENVAR_TEST_MOUNT_PATH,
    MAX_WORKERS,
    MIGRATION_DELETE_DELAY,
    MIGRATION_SETTLE_DELAY,
    SUPPORTED_PACKAGE_TYPES,
)

# Stores every new build group inherits, per package type
DEFAULT_GROUP_CONSTITUENTS: Dict[str, List[str]] = {
    "maven": ["maven:hosted:shared-imports", "maven:remote:central"],
    "npm": ["npm:hosted:shared-imports", "npm:remote:npmjs"],
}


class BuildMeta(IndyBaseModel):
    """
    Repository layout provisioned for a replayed build.

    Attributes:
        package_type: Package ecosystem of the build
        constituents: Stores appended to the build group after its own hosted repo
    """

    package_type: str
    constituents: List[str] = Field(default_factory=list)


def decide_meta(package_type: str) -> BuildMeta:
    """Return the build layout for a package type."""
    return BuildMeta(
        package_type=package_type,
        constituents=list(DEFAULT_GROUP_CONSTITUENTS.get(package_type, [])),
    )


class ReplayConfig(IndyBaseModel):
    """
    Configuration resolved once at startup and passed into the run.

    Attributes:
        download_dir: Staging directory for downloads
        upload_dir: Upload cache directory when no mount path is set
        mount_path: Persistent cache root; the upload cache becomes <mount_path>/<tracking id>/upload
        delete_delay: Pause after each migration delete (seconds)
        settle_delay: Pause before a migration batch starts (seconds)
        workers: Worker count; 1 runs sequentially
        clear_cache: Purge the upload cache before starting
        dry_run: Log every action without performing it
        proxy_password: Password sent to the generic proxy
    """

    download_dir: str = DEFAULT_DOWNLOAD_DIR
    upload_dir: str = DEFAULT_UPLOAD_DIR
    mount_path: Optional[str] = None
    delete_delay: float = Field(default=MIGRATION_DELETE_DELAY, ge=0)
    settle_delay: float = Field(default=MIGRATION_SETTLE_DELAY, ge=0)
    workers: int = Field(default=DEFAULT_WORKERS, ge=1, le=MAX_WORKERS)
    clear_cache: bool = False
    dry_run: bool = False
    proxy_password: str = DEFAULT_PROXY_PASSWORD

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "ReplayConfig":
        """
        Build the configuration from defaults, the environment, a TOML file and overrides.

        Later sources win: defaults, ``TEST_MOUNT_PATH``, the ``[replay]`` section
        of ``config_path``, then keyword overrides whose value is not None.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        mount_path = env.get(ENVAR_TEST_MOUNT_PATH)
        if mount_path:
            values["mount_path"] = mount_path

        if config_path:
            values.update(ConfigManager(config_path).get_section("replay"))

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class ReplayContext(IndyBaseModel):
    """
    Inputs of one replay or migration invocation.

    Attributes:
        original_indy: Indy the build originally ran against
        target_indy: Indy the build is replayed on
        package_type: Package type of the build (maven, npm)
        build_name: Identifier of the new build on the target
        proxy_url: Generic proxy URL; enables proxy passthrough for generic downloads
        migrate_target_indy: Migration destination; switches the run to migration
        additional_repos: Store keys the replay reads directly instead of through the build group
    """

    original_indy: str
    target_indy: str
    package_type: str
    build_name: str
    proxy_url: Optional[str] = None
    migrate_target_indy: Optional[str] = None
    additional_repos: List[str] = Field(default_factory=list)

    @field_validator("package_type")
    @classmethod
    def validate_package_type(cls, v: str) -> str:
        """Only maven and npm builds can be replayed."""
        if v not in SUPPORTED_PACKAGE_TYPES:
            raise ValueError(
                f"Invalid package type: {v}. Valid types are: {', '.join(SUPPORTED_PACKAGE_TYPES)}"
            )
        return v

    @property
    def proxy_enabled(self) -> bool:
        return bool(self.proxy_url)

    @property
    def migrate_enabled(self) -> bool:
        return bool(self.migrate_target_indy)


__all__ = [
    "BuildMeta",
    "decide_meta",
    "ReplayConfig",
    "ReplayContext",
    "DEFAULT_GROUP_CONSTITUENTS",
]
