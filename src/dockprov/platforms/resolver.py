"""Resolve an image reference to an OS family and version."""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from dockprov.errors import UnsupportedPlatform
from dockprov.models.platform import Family, PlatformSpec


logger = logging.getLogger(__name__)

# Evaluated top to bottom; the first family with a matching pattern wins.
FAMILY_RULES: List[Tuple[Family, Tuple[str, ...]]] = [
    (Family.DEBIAN, ("debian", "ubuntu", "cumulus")),
    (Family.FEDORA, ("fedora",)),
    (Family.REDHAT, ("centos", "^el-", "eos", "oracle", "redhat", "scientific")),
    (Family.SLES, ("opensuse", "sles")),
    (Family.ARCHLINUX, ("archlinux",)),
]

_COMPILED_RULES: List[Tuple[Family, Pattern]] = [
    (family, re.compile("|".join(patterns))) for family, patterns in FAMILY_RULES
]

DEFAULT_TAG = "latest"


def match_os_family(identifier: Optional[str]) -> Optional[Family]:
    """Return the first family whose patterns match ``identifier``."""
    if not identifier:
        return None
    for family, pattern in _COMPILED_RULES:
        if pattern.search(identifier):
            return family
    return None


def split_image(image: str) -> Tuple[str, str]:
    """Split ``image`` into repository and tag.

    A colon followed by a path component belongs to a registry host, not a tag.
    """
    repository, sep, tag = image.rpartition(":")
    if not sep or "/" in tag:
        return image, DEFAULT_TAG
    return repository, tag


def resolve_platform(image: str) -> PlatformSpec:
    """Resolve ``image`` (``repository[:tag]``) to a PlatformSpec.

    The family comes from the repository, falling back to the tag. The
    version is the tag as given.
    """
    repository, tag = split_image(image)
    repository = repository.replace("/", "_", 1)

    family = match_os_family(repository) or match_os_family(tag)
    if family is None:
        raise UnsupportedPlatform(image)

    logger.debug(f"Resolved {image} to {family.value} {tag}")
    return PlatformSpec(family=family, version=tag)
