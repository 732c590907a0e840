"""Core object-model types: group/version identifiers, object metadata and workloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Protocol


@dataclass(frozen=True)
class GroupResource:
    """A resource name qualified by its API group."""

    group: str
    resource: str

    def __str__(self) -> str:
        return f"{self.resource}.{self.group}" if self.group else self.resource


@dataclass(frozen=True)
class GroupVersionResource:
    """A resource name qualified by API group and version."""

    group: str
    version: str
    resource: str

    def group_resource(self) -> GroupResource:
        """Drop the version, keeping group and resource."""
        return GroupResource(self.group, self.resource)


@dataclass(frozen=True)
class GroupVersionKind:
    """A kind qualified by API group and version."""

    group: str
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def with_kind(self, kind: str) -> GroupVersionKind:
        """Qualify a kind with this group and version."""
        return GroupVersionKind(self.group, self.version, kind)

    def with_resource(self, resource: str) -> GroupVersionResource:
        """Qualify a resource with this group and version."""
        return GroupVersionResource(self.group, self.version, resource)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version


GROUP_VERSION = GroupVersion(group="kubecluster.org", version="v1alpha1")
SCHEME_GROUP_VERSION = GROUP_VERSION


def resource(name: str) -> GroupResource:
    """Return the group-qualified resource for an unqualified resource name."""
    return GROUP_VERSION.with_resource(name).group_resource()


@dataclass
class OwnerReference:
    """Reference from a dependent object to the object that owns it."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""
    controller: bool | None = None
    block_owner_deletion: bool | None = None


@dataclass
class ObjectMeta:
    """Metadata carried by every stored object."""

    name: str = ""
    namespace: str = ""
    generate_name: str = ""
    uid: str = ""
    resource_version: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)
    creation_timestamp: datetime | None = None
    deletion_timestamp: datetime | None = None


@dataclass
class ContainerPort:
    name: str = ""
    container_port: int = 0
    protocol: str = ""


@dataclass
class Container:
    name: str = ""
    image: str = ""
    ports: list[ContainerPort] = field(default_factory=list)


@dataclass
class PodSpec:
    containers: list[Container] = field(default_factory=list)
    restart_policy: str = ""


@dataclass
class PodTemplateSpec:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)


@dataclass
class Pod:
    KIND: ClassVar[str] = "Pod"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)
    phase: str = ""


@dataclass
class Service:
    KIND: ClassVar[str] = "Service"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    cluster_ip: str = ""
    selector: dict[str, str] = field(default_factory=dict)


@dataclass
class ConfigMap:
    KIND: ClassVar[str] = "ConfigMap"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    data: dict[str, str] = field(default_factory=dict)


class HasMetadata(Protocol):
    metadata: ObjectMeta


def get_controller_of(obj: HasMetadata) -> OwnerReference | None:
    """Return the owner reference marked as controller, if any."""
    return next(
        (ref for ref in obj.metadata.owner_references if ref.controller),
        None,
    )


def is_controlled_by(obj: HasMetadata, owner: HasMetadata) -> bool:
    """Tell whether ``owner`` is the controller of ``obj``, matched by UID."""
    ref = get_controller_of(obj)
    return ref is not None and ref.uid == owner.metadata.uid