# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Extended XMP packet header and reassembly.

Packets too large for one carrier segment (e.g. a JPEG APP1 marker) are split
into several "extended" packets. Each starts with a fixed header::

    32 bytes  GUID, the uppercase hex MD5 digest of the complete payload
     4 bytes  total payload length, big-endian unsigned
     4 bytes  offset of this fragment in the payload, big-endian unsigned

followed by the fragment bytes. The primary XMP document names the GUID in
``xmpNote:HasExtendedXMP``.
"""

import hashlib
import logging
import re
import struct
from dataclasses import dataclass, field

from .exceptions import ExtendedXMPError

logger = logging.getLogger(__name__)

HEADER = struct.Struct(">32sII")

_GUID_RE = re.compile(r"[0-9A-F]{32}", re.ASCII)


@dataclass(frozen=True)
class ExtendedPacket:
    """One decoded extended XMP packet."""

    guid: str
    length: int
    offset: int
    payload: bytes


def parse_extended_header(packet: bytes) -> ExtendedPacket:
    """Splits an extended XMP packet into its header fields and payload.

    Raises:
        ExtendedXMPError: If the packet is too short or the GUID is not
            32 uppercase hex digits.
    """
    if len(packet) < HEADER.size:
        raise ExtendedXMPError(
            f"Extended XMP packet too short ({len(packet)} bytes)"
        )
    raw_guid, length, offset = HEADER.unpack_from(packet)
    guid = raw_guid.decode("ascii", errors="replace")
    if not _GUID_RE.fullmatch(guid):
        raise ExtendedXMPError(f"Invalid extended XMP GUID {guid!r}")
    return ExtendedPacket(guid, length, offset, bytes(packet[HEADER.size :]))


@dataclass
class ExtendedXMPState:
    """Fragments received so far for one extended XMP payload.

    Fragments must arrive in order: each one has to start where the
    previous one ended.
    """

    guid: str
    length: int | None = None
    buffer: bytearray = field(default_factory=bytearray)

    @property
    def offset(self) -> int:
        """Offset the next fragment is expected at."""
        return len(self.buffer)

    def add(self, packet: ExtendedPacket) -> bytes | None:
        """Appends a fragment to the buffer.

        Returns:
            The complete payload once all bytes arrived and the digest
            matches the GUID, otherwise None.

        Raises:
            ExtendedXMPError: If the fragment does not belong to this
                payload, is out of order, overruns the declared length, or
                the completed payload fails the digest check.
        """
        if packet.guid != self.guid:
            raise ExtendedXMPError(
                f"Extended XMP GUID {packet.guid} does not match {self.guid}"
            )
        if self.length is None:
            self.length = packet.length
        elif packet.length != self.length:
            raise ExtendedXMPError(
                f"Extended XMP length changed from {self.length} "
                f"to {packet.length}"
            )
        if packet.offset != self.offset:
            raise ExtendedXMPError(
                f"Extended XMP fragment at offset {packet.offset}, "
                f"expected {self.offset}"
            )
        if packet.offset + len(packet.payload) > self.length:
            raise ExtendedXMPError(
                f"Extended XMP fragment overruns declared length {self.length}"
            )

        self.buffer += packet.payload
        if len(self.buffer) < self.length:
            logger.debug(
                "Buffered extended XMP fragment, %d of %d bytes",
                len(self.buffer),
                self.length,
            )
            return None

        digest = hashlib.md5(self.buffer, usedforsecurity=False).hexdigest().upper()
        if digest != self.guid:
            raise ExtendedXMPError(
                f"Extended XMP digest {digest} does not match GUID {self.guid}"
            )
        return bytes(self.buffer)
