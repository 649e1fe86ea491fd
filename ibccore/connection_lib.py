"""Connection version negotiation."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import IbcError
from .types import ORDERED, UNORDERED, Feature, Version

IBC_VERSION_IDENTIFIER = "1"


def default_ibc_version() -> Version:
    """The latest supported IBC version, used in version negotiation."""
    return Version(IBC_VERSION_IDENTIFIER, [ORDERED, UNORDERED])


def set_supported_versions(supported_versions: Iterable[Version], dest: list[Version]) -> list[Version]:
    """The versions to use in place of ``dest``, which must still be empty."""
    if dest:
        raise IbcError("Versions already set")
    return list(supported_versions)


def verify_supported_feature(version: Version, feature: Feature) -> bool:
    return feature in version.features


def find_supported_version(supported_versions: Iterable[Version], version: Version) -> Version | None:
    """The version with a matching identifier, if any."""
    return next((v for v in supported_versions if v.identifier == version.identifier), None)


def verify_proposed_version(supported_version: Version, proposed_version: Version) -> bool:
    """True if identifiers match and every proposed feature is supported; no features fails."""
    if supported_version.identifier != proposed_version.identifier:
        return False
    if not proposed_version.features:
        return False
    return all(verify_supported_feature(supported_version, f) for f in proposed_version.features)


def is_supported_version(supported_versions: Iterable[Version], version: Version) -> bool:
    found = find_supported_version(supported_versions, version)
    return found is not None and verify_proposed_version(found, version)


def is_supported(supported_versions: Iterable[Version], feature: Feature) -> bool:
    return any(verify_supported_feature(v, feature) for v in supported_versions)


def get_feature_set_intersection(
    source_feature_set: Iterable[Feature], counterparty_feature_set: Iterable[Feature]
) -> list[Feature]:
    """Source features also offered by the counterparty, in source order."""
    counterparty = list(counterparty_feature_set)
    return [feature for feature in source_feature_set if feature in counterparty]


def pick_version(
    supported_versions: Iterable[Version], counterparty_versions: Iterable[Version]
) -> Version:
    """The first supported version the counterparty shares with a non-empty feature set."""
    counterparty = list(counterparty_versions)
    for supported in supported_versions:
        found = find_supported_version(counterparty, supported)
        if found is None:
            continue
        features = get_feature_set_intersection(supported.features, found.features)
        if features:
            return Version(supported.identifier, features)
    raise IbcError("No matching versions found")