# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""xmpreader - Extract validated metadata from XMP packets."""

from importlib.metadata import PackageNotFoundError, version

from ._types import (
    DEFAULT_GROUP_PRECEDENCE,
    GROUP_TAGS,
    Check,
    Group,
    PropertyDescriptor,
    Shape,
)
from .exceptions import (
    ExtendedXMPError,
    MalformedXMPError,
    UnsafeXMPError,
    XMPReaderError,
)
from .reader import MAX_DEPTH, Reader, is_supported
from .registry import DEFAULT_REGISTRY, Registry
from .results import ResultStore
from .validate import ValidatorSet

try:
    __version__ = version("xmpreader")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "Reader",
    "is_supported",
    "MAX_DEPTH",
    "Registry",
    "DEFAULT_REGISTRY",
    "ValidatorSet",
    "ResultStore",
    "PropertyDescriptor",
    "Group",
    "Shape",
    "Check",
    "GROUP_TAGS",
    "DEFAULT_GROUP_PRECEDENCE",
    "XMPReaderError",
    "MalformedXMPError",
    "UnsafeXMPError",
    "ExtendedXMPError",
]
