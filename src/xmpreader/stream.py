# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Input preparation applied to raw XMP bytes before tokenizing.

XMP packets can arrive in UTF-8, UTF-16 or UTF-32 and are fed in chunks of
arbitrary size. The helpers here detect the encoding of a document from its
leading bytes, transcode chunks to text without breaking multi-byte
sequences, and watch the text for document type declarations.
"""

import codecs

from .exceptions import MalformedXMPError

# Bytes needed to tell the encodings below apart
SNIFF_LENGTH = 4

# Byte order marks first, then the bare ``<?`` / ``<`` signatures.
# UTF-32 comes before UTF-16 since its marks start with the UTF-16 ones.
_SIGNATURES = (
    (b"\x00\x00\xfe\xff", "utf-32-be"),
    (b"\xff\xfe\x00\x00", "utf-32-le"),
    (b"\x00\x00\x00<", "utf-32-be"),
    (b"<\x00\x00\x00", "utf-32-le"),
    (b"\xfe\xff", "utf-16-be"),
    (b"\xff\xfe", "utf-16-le"),
    (b"\x00<\x00?", "utf-16-be"),
    (b"<\x00?\x00", "utf-16-le"),
)

_DOCTYPE_SIGNATURE = "<!doctype"


def sniff_encoding(head: bytes) -> str:
    """Returns the codec name for a document starting with ``head``.

    Anything that is not recognizably UTF-16 or UTF-32 is read as UTF-8.
    """
    for signature, encoding in _SIGNATURES:
        if head.startswith(signature):
            return encoding
    return "utf-8"


class ChunkDecoder:
    """Incrementally turns the bytes of one document into text.

    The first :data:`SNIFF_LENGTH` bytes are held back until the encoding
    can be told, after which chunks are decoded as they arrive. A leading
    byte order mark is dropped and NUL characters are removed.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Forgets the current document so the next one is sniffed again."""
        self.encoding: str | None = None
        self._head = b""
        self._decoder: codecs.IncrementalDecoder | None = None
        self._at_start = True

    def decode(self, data: bytes, final: bool = False) -> str:
        """Decodes a chunk.

        Args:
            data: Next raw bytes of the document.
            final: True if no more bytes follow for this document.

        Returns:
            Text decoded so far. May be empty while bytes are buffered.

        Raises:
            MalformedXMPError: If the bytes are not valid in the detected
                encoding.
        """
        if self._decoder is None:
            self._head += data
            if len(self._head) < SNIFF_LENGTH and not final:
                return ""
            self.encoding = sniff_encoding(self._head)
            self._decoder = codecs.getincrementaldecoder(self.encoding)()
            data, self._head = self._head, b""

        try:
            text = self._decoder.decode(data, final)
        except UnicodeDecodeError as e:
            raise MalformedXMPError(f"Invalid {self.encoding} data: {e}") from e

        if self._at_start and text:
            self._at_start = False
            if text.startswith("\ufeff"):
                text = text[1:]

        return text.replace("\x00", "")


class DoctypeScanner:
    """Finds ``<!DOCTYPE`` in text fed piece by piece.

    The tail of each piece is kept so a declaration split across chunk
    boundaries is still found, however small the chunks are.
    """

    def __init__(self) -> None:
        self._tail = ""

    def reset(self) -> None:
        self._tail = ""

    def scan(self, text: str) -> bool:
        """Returns True if a doctype signature ends within ``text``."""
        window = (self._tail + text).lower()
        self._tail = window[-(len(_DOCTYPE_SIGNATURE) - 1) :]
        return _DOCTYPE_SIGNATURE in window
