# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the xmpreader test suite."""

import logging
from pathlib import Path

import pytest

from xmpreader.reader import Reader
from xmpreader.validate import ValidatorSet

DATA_DIR = Path(__file__).parent / "data"

NAMESPACES = {
    "x": "adobe:ns:meta/",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "exif": "http://ns.adobe.com/exif/1.0/",
    "tiff": "http://ns.adobe.com/tiff/1.0/",
    "aux": "http://ns.adobe.com/exif/1.0/aux/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "xmp": "http://ns.adobe.com/xap/1.0/",
    "xmpRights": "http://ns.adobe.com/xap/1.0/rights/",
    "xmpNote": "http://ns.adobe.com/xmp/note/",
    "cc": "http://creativecommons.org/ns#",
    "photoshop": "http://ns.adobe.com/photoshop/1.0/",
    "Iptc4xmpCore": "http://iptc.org/std/Iptc4xmpCore/1.0/xmlns/",
    "Iptc4xmpExt": "http://iptc.org/std/Iptc4xmpExt/2008-02-29/",
    "GPano": "http://ns.google.com/photos/1.0/panorama/",
    "foo": "http://example.com/foo/",
}

_XMLNS = " ".join(
    f'xmlns:{prefix}="{uri}"' for prefix, uri in NAMESPACES.items() if prefix != "x"
)


def make_xmp(body: str = "", attributes: str = "") -> bytes:
    """Builds a complete XMP packet around one rdf:Description.

    Args:
        body: Child elements of the description.
        attributes: Extra attributes of the description.

    Returns:
        UTF-8 encoded packet.
    """
    return (
        '<?xpacket begin="" id="W5M0MpCehiHzreSzNTczkc9d"?>\n'
        '<x:xmpmeta xmlns:x="adobe:ns:meta/">\n'
        f"<rdf:RDF {_XMLNS}>\n"
        f'<rdf:Description rdf:about="" {attributes}>\n'
        f"{body}\n"
        "</rdf:Description>\n"
        "</rdf:RDF>\n"
        "</x:xmpmeta>\n"
        '<?xpacket end="w"?>'
    ).encode("utf-8")


def read_xmp(body: str = "", attributes: str = "") -> dict:
    """Reads a packet built by :func:`make_xmp` and returns the results."""
    reader = Reader()
    assert reader.parse(make_xmp(body, attributes))
    return reader.get_results()


@pytest.fixture
def reader() -> Reader:
    """Fresh reader session."""
    return Reader()


@pytest.fixture
def validators() -> ValidatorSet:
    """Validator set logging to the xmpreader test logger."""
    return ValidatorSet(logging.getLogger("xmpreader.tests"))


@pytest.fixture
def data_dir() -> Path:
    """Directory with XMP sample files."""
    return DATA_DIR


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undoes logger configuration made by setup_logging during a test."""
    yield
    xmpreader_logger = logging.getLogger("xmpreader")
    xmpreader_logger.handlers.clear()
    xmpreader_logger.setLevel(logging.NOTSET)
