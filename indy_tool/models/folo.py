"""Folo tracked-content models.

A folo record is the report Indy keeps for a tracked build: every artifact the
build downloaded and every artifact it uploaded, each with the store it went
through and the md5 observed at the time.
"""

import json
from enum import Enum
from typing import List, Optional, Union

from pydantic import Field, field_validator

from .base import IndyRecordModel


class AccessChannel(str, Enum):
    """How an artifact was reached during the original build."""

    NATIVE = "NATIVE"
    GENERIC_PROXY = "GENERIC_PROXY"


class StoreKey(IndyRecordModel):
    """
    Composite identifier of a logical repository.

    Attributes:
        package_type: Package ecosystem (maven, npm, generic-http)
        store_type: Repository type (hosted, remote, group)
        name: Repository name
    """

    package_type: str
    store_type: str
    name: str

    @classmethod
    def from_string(cls, key: str) -> "StoreKey":
        """Parse ``packageType:type:name``.

        Raises:
            ValueError: If the key does not have three non-empty parts
        """
        parts = key.split(":")
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Invalid store key: {key!r}")
        return cls(package_type=parts[0], store_type=parts[1], name=parts[2])


class TrackedContentEntry(IndyRecordModel):
    """
    One recorded access.

    Attributes:
        store_key: Store the access went through (``maven:hosted:build-1234``)
        path: Artifact path relative to the store root
        md5: Checksum captured at record time
        origin_url: Original remote URL (generic proxy downloads)
        local_url: URL on the original Indy (downloads)
        access_channel: NATIVE or GENERIC_PROXY; unknown values are kept as strings
    """

    store_key: str = Field(alias="storeKey")
    path: str
    md5: str = Field(min_length=1)
    origin_url: Optional[str] = Field(default=None, alias="originUrl")
    local_url: Optional[str] = Field(default=None, alias="localUrl")
    access_channel: Union[AccessChannel, str] = Field(default=AccessChannel.NATIVE, alias="accessChannel")
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    size: Optional[int] = None

    @field_validator("md5")
    @classmethod
    def normalize_md5(cls, v: str) -> str:
        """Checksums are compared lower-case."""
        v = v.strip().lower()
        if not v:
            raise ValueError("md5 must not be blank")
        return v

    @property
    def is_generic_proxy(self) -> bool:
        """True when the artifact was fetched through the generic proxy."""
        return self.access_channel == AccessChannel.GENERIC_PROXY


class TrackingKey(IndyRecordModel):
    """Tracking session identifier."""

    id: str


class TrackedContent(IndyRecordModel):
    """
    Folo report of one tracked build.

    Attributes:
        tracking_key: Identifier of the tracked session (``key`` on the wire)
        downloads: Artifacts fetched during the build, in recorded order
        uploads: Artifacts published by the build, in recorded order
    """

    tracking_key: TrackingKey = Field(alias="key")
    downloads: List[TrackedContentEntry] = Field(default_factory=list)
    uploads: List[TrackedContentEntry] = Field(default_factory=list)

    @field_validator("downloads", "uploads", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        """Indy sends null for empty sections."""
        return [] if v is None else v

    @classmethod
    def from_json_file(cls, path: str) -> "TrackedContent":
        """Load a report saved from ``api/folo/admin/{id}/record``."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate(json.load(f))


__all__ = [
    "AccessChannel",
    "StoreKey",
    "TrackedContentEntry",
    "TrackingKey",
    "TrackedContent",
]
