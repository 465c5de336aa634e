"""
URL remapping of folo records.

Modules:
    - paths: URL and path helpers (normalization, host substitution, version rewrite)
    - entries: Replay-download, replay-upload and migration policies
"""

from .entries import (
    create_upload_urls,
    download_url_for,
    migration_targets,
    prepare_download_entries,
    prepare_migrate_entries,
    prepare_upload_entries,
    promotion_path,
)
from .paths import (
    alter_upload_path,
    build_suffix,
    generate_build_name,
    generic_repo_name,
    join_url_path,
    norm_indy_url,
    remote_to_hosted,
    set_hostname,
    store_key_to_path,
    validate_indy_url,
)

__all__ = [
    "create_upload_urls",
    "download_url_for",
    "migration_targets",
    "prepare_download_entries",
    "prepare_migrate_entries",
    "prepare_upload_entries",
    "promotion_path",
    "alter_upload_path",
    "build_suffix",
    "generate_build_name",
    "generic_repo_name",
    "join_url_path",
    "norm_indy_url",
    "remote_to_hosted",
    "set_hostname",
    "store_key_to_path",
    "validate_indy_url",
]
