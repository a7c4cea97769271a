# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for xmpreader."""


class XMPReaderError(Exception):
    """Base exception for all xmpreader errors."""


class MalformedXMPError(XMPReaderError):
    """The XML tokenizer rejected the byte stream."""


class UnsafeXMPError(XMPReaderError):
    """The document contains a construct that is refused outright."""


class ExtendedXMPError(XMPReaderError):
    """An Extended XMP packet is inconsistent with the session state."""
