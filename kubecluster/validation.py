"""Validation of KubeCluster objects and DNS-1035 label checks."""

from __future__ import annotations

import re

from kubecluster.api import CLUSTER_DEFAULT_CONTAINER_NAME, ClusterSpec, KubeCluster

DNS1035_LABEL_MAX_LENGTH = 63
_DNS1035_LABEL_FMT = "[a-z]([-a-z0-9]*[a-z0-9])?"
_DNS1035_LABEL_RE = re.compile(f"^{_DNS1035_LABEL_FMT}$")
_DNS1035_LABEL_ERR = (
    "a DNS-1035 label must consist of lower case alphanumeric characters or '-', "
    "start with an alphabetic character, and end with an alphanumeric character "
    "(e.g. 'my-name',  or 'abc-123', regex used for validation is "
    f"'{_DNS1035_LABEL_FMT}')"
)


class ValidationError(ValueError):
    """Raised when a KubeCluster does not pass validation."""


def is_dns1035_label(value: str) -> list[str]:
    """Return the reasons ``value`` is not a DNS-1035 label; empty when it is one."""
    errors = []
    if len(value) > DNS1035_LABEL_MAX_LENGTH:
        errors.append(f"must be no more than {DNS1035_LABEL_MAX_LENGTH} characters")
    if not _DNS1035_LABEL_RE.match(value):
        errors.append(_DNS1035_LABEL_ERR)
    return errors


def name_is_dns1035_label(name: str, prefix: bool) -> list[str]:
    """Validate an object name; as a prefix a trailing dash is allowed."""
    if prefix and len(name) > 1 and name.endswith("-"):
        name = name[:-1] + "a"
    return is_dns1035_label(name)


def validate_cluster(cluster: KubeCluster) -> None:
    """Raise ValidationError when the cluster's name or spec is invalid."""
    errors = name_is_dns1035_label(cluster.metadata.name, False)
    if errors:
        raise ValidationError(f"TFCluster name is invalid: [{' '.join(errors)}]")
    validate_cluster_spec(cluster.spec)


def validate_cluster_spec(spec: ClusterSpec) -> None:
    """Raise ValidationError when the cluster spec is invalid."""
    if not spec.cluster_type:
        raise ValidationError("KubeCluster is not valid: cluster type expected")
    if not spec.cluster_replica_spec:
        raise ValidationError("KubeCluster is not valid")
    main_container = spec.main_container or CLUSTER_DEFAULT_CONTAINER_NAME
    for rtype, value in spec.cluster_replica_spec.items():
        errors = is_dns1035_label(str(rtype).lower())
        if errors:
            raise ValidationError(";".join(errors))
        if value is None or not value.template.spec.containers:
            raise ValidationError(
                f"KubeCluster is not valid: containers definition expected in {rtype}"
            )
        containers = value.template.spec.containers
        if any(not container.image for container in containers):
            raise ValidationError(
                f"KubeCluster is not valid: Image is undefined in the container of {rtype}"
            )
        if not any(container.name == main_container for container in containers):
            raise ValidationError(
                "KubeClusterSpec is not valid: There is no container named "
                f"{CLUSTER_DEFAULT_CONTAINER_NAME} in {rtype}"
            )