# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Streaming XMP reader.

:class:`Reader` feeds XMP bytes through lxml's feed parser and turns the
element events into property values with an explicit frame stack. Only
properties listed in the :class:`~xmpreader.registry.Registry` are kept;
everything else is skipped and logged.

A property whose RDF structure does not match its registered shape is
dropped as a whole, but the rest of the document is still read. Malformed
XML stops the current document while keeping what was already extracted.
A document type declaration marks the session unsafe for good.

Example::

    reader = Reader()
    if reader.parse(xmp_bytes):
        results = reader.get_results()
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from lxml import etree

from ._types import NS_RDF, NS_XML, Group, PropertyDescriptor, Shape
from .exceptions import ExtendedXMPError, MalformedXMPError, UnsafeXMPError
from .extended import ExtendedXMPState, parse_extended_header
from .registry import DEFAULT_REGISTRY, Registry
from .results import ResultStore
from .stream import ChunkDecoder, DoctypeScanner
from .utils import split_clark
from .validate import LANG_CODE_RE, ValidatorSet

logger = logging.getLogger(__name__)

MAX_DEPTH = 64

XML_LANG = f"{{{NS_XML}}}lang"

# RDF container element expected inside a property of each container shape
_CONTAINER_ELEMENTS = {
    Shape.SEQ: "Seq",
    Shape.BAG: "Bag",
    Shape.LANG: "Alt",
    Shape.BAGSTRUCT: "Bag",
}


class FrameKind(Enum):
    """What the element a frame was opened for means to the reader."""

    ROOT = auto()
    DESCRIPTION = auto()
    IGNORE = auto()
    SIMPLE = auto()
    QUALIFIED = auto()
    VALUE = auto()
    STRUCT = auto()
    CONTAINER = auto()
    LIST = auto()
    ITEM = auto()
    LANG_ITEM = auto()
    STRUCT_ITEM = auto()


_LEAF_KINDS = frozenset({FrameKind.SIMPLE, FrameKind.ITEM, FrameKind.LANG_ITEM})


@dataclass
class ParseFrame:
    """One open element on the reader's stack.

    Attributes:
        kind: How the element is handled.
        namespace: Namespace URI of the element.
        local: Local name of the element.
        descriptor: Property the element contributes to, if any.
        text: Character data collected for leaf values.
        value: Accumulated value: a list, a language map, a member map,
            or a scalar supplied by ``rdf:resource``/``rdf:value``.
        lang: Language of a ``rdf:li`` in a language alternative.
        owner: Stack index of the frame whose value this frame feeds.
        top: Stack index of the enclosing top-level property.
        qualified: Value is given by ``rdf:value`` among qualifiers.
        needs_value: The text of the element is not the value, so one has
            to come from ``rdf:value``.
        depth: Nesting below an ignored element.
        invalid: Structure was wrong somewhere inside this property.
    """

    kind: FrameKind
    namespace: str = ""
    local: str = ""
    descriptor: PropertyDescriptor | None = None
    text: list[str] = field(default_factory=list)
    value: Any = None
    lang: str | None = None
    owner: int | None = None
    top: int | None = None
    qualified: bool = False
    needs_value: bool = False
    depth: int = 0
    invalid: bool = False


def _qname(namespace: str, local: str) -> str:
    return f"{{{namespace}}}{local}" if namespace else local


def _frame_label(frame: ParseFrame) -> str:
    """Names the property a frame belongs to in log messages."""
    if frame.kind in (FrameKind.SIMPLE, FrameKind.STRUCT, FrameKind.CONTAINER):
        return _qname(frame.namespace, frame.local)
    return f"item of {frame.descriptor.name}"


class _ParserTarget:
    """lxml parser target that extracts registered properties.

    lxml calls :meth:`start`, :meth:`end`, :meth:`data` and :meth:`close`
    while it tokenizes; values are written to the result store as soon as
    their top-level property closes.
    """

    def __init__(
        self,
        registry: Registry,
        validators: ValidatorSet,
        results: ResultStore,
        log: logging.Logger,
        max_depth: int,
    ) -> None:
        self._registry = registry
        self._validators = validators
        self._results = results
        self._logger = log
        self._max_depth = max_depth
        self._stack: list[ParseFrame] = []
        self._overflow = 0

        self._start_handlers: dict[
            FrameKind, Callable[[ParseFrame, str, str, Any], ParseFrame]
        ] = {
            FrameKind.ROOT: self._start_in_root,
            FrameKind.DESCRIPTION: self._start_in_description,
            FrameKind.SIMPLE: self._start_in_leaf,
            FrameKind.ITEM: self._start_in_leaf,
            FrameKind.LANG_ITEM: self._start_in_leaf,
            FrameKind.QUALIFIED: self._start_in_qualified,
            FrameKind.VALUE: self._start_in_value,
            FrameKind.STRUCT: self._start_in_struct,
            FrameKind.STRUCT_ITEM: self._start_in_struct,
            FrameKind.CONTAINER: self._start_in_container,
            FrameKind.LIST: self._start_in_list,
        }
        self._end_handlers: dict[FrameKind, Callable[[ParseFrame], None]] = {
            FrameKind.SIMPLE: self._end_leaf,
            FrameKind.ITEM: self._end_leaf,
            FrameKind.LANG_ITEM: self._end_leaf,
            FrameKind.VALUE: self._end_value,
            FrameKind.STRUCT: self._end_struct,
            FrameKind.STRUCT_ITEM: self._end_struct,
            FrameKind.CONTAINER: self._end_container,
        }

    # lxml target interface

    def start(self, tag: str, attrib: Any) -> None:
        if self._overflow or len(self._stack) >= self._max_depth:
            if not self._overflow:
                self._log(
                    "max_depth",
                    "XMP nested deeper than %d elements, ignoring %s",
                    self._max_depth,
                    tag,
                )
                if self._stack:
                    self._mark_invalid(self._stack[-1].top)
            self._overflow += 1
            return

        parent = self._stack[-1] if self._stack else None
        if parent is not None and parent.kind is FrameKind.IGNORE:
            parent.depth += 1
            return

        namespace, local = split_clark(tag) or ("", tag)
        if parent is None:
            frame = self._start_in_root(None, namespace, local, attrib)
        else:
            frame = self._start_handlers[parent.kind](
                parent, namespace, local, attrib
            )
        self._stack.append(frame)

    def end(self, tag: str) -> None:
        if self._overflow:
            self._overflow -= 1
            return

        frame = self._stack[-1]
        if frame.kind is FrameKind.IGNORE and frame.depth:
            frame.depth -= 1
            return

        self._stack.pop()
        handler = self._end_handlers.get(frame.kind)
        if handler is not None:
            handler(frame)

    def data(self, text: str) -> None:
        if self._overflow or not self._stack:
            return
        frame = self._stack[-1]
        if frame.kind is FrameKind.VALUE or (
            frame.kind in _LEAF_KINDS and not frame.qualified
        ):
            frame.text.append(text)
        elif frame.kind in (FrameKind.CONTAINER, FrameKind.LIST) and text.strip():
            self._mismatch(
                frame.top,
                "Unexpected text %r inside %s",
                text.strip(),
                _qname(frame.namespace, frame.local),
            )

    def close(self) -> None:
        self._stack.clear()
        self._overflow = 0

    # Helpers

    def _log(self, check: str, msg: str, *args: Any, level: int = logging.INFO) -> None:
        self._logger.log(level, msg, *args, extra={"xmp_check": check})

    def _validate(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool, label: str
    ) -> Any:
        value = self._validators.validate(descriptor, value, standalone)
        if value is None:
            self._log("validation", "%s failed validation", label)
        return value

    def _mark_invalid(self, top: int | None) -> None:
        if top is not None:
            self._stack[top].invalid = True

    def _mismatch(self, top: int | None, msg: str, *args: Any) -> None:
        if top is not None and self._stack[top].invalid:
            return
        self._log("structure", msg, *args)
        self._mark_invalid(top)

    def _ignore(self, namespace: str, local: str, top: int | None = None) -> ParseFrame:
        return ParseFrame(FrameKind.IGNORE, namespace, local, top=top)

    def _struct_namespace(self, frame: ParseFrame) -> str:
        """Namespace that members of the struct in ``frame`` must use."""
        while frame.owner is not None:
            frame = self._stack[frame.owner]
        return frame.namespace

    def _note_qualifier(self, namespace: str, local: str) -> None:
        if namespace in (NS_RDF, NS_XML, ""):
            return
        if self._registry.lookup(namespace, local) is not None:
            self._log(
                "qualifier",
                "Ignoring qualifier %s, it is not a property in this position",
                _qname(namespace, local),
            )
        else:
            self._log(
                "qualifier",
                "Skipping qualifier %s",
                _qname(namespace, local),
            )

    # Attributes

    def _read_description_attributes(self, attrib: Any) -> None:
        """Stores simple properties given as rdf:Description attributes."""
        for key, value in attrib.items():
            name = split_clark(key)
            if name is None:
                self._log(
                    "unknown_attribute",
                    "Ignoring unqualified attribute %s",
                    key,
                )
                continue
            namespace, local = name
            if namespace in (NS_RDF, NS_XML):
                continue

            descriptor = self._registry.lookup(namespace, local)
            if descriptor is None:
                self._log(
                    "unknown_attribute",
                    "Ignoring unrecognized attribute %s",
                    key,
                )
                continue
            if descriptor.struct_part:
                self._log(
                    "struct_part",
                    "Ignoring struct member %s outside of its struct",
                    key,
                )
                continue
            if descriptor.shape is not Shape.SIMPLE:
                self._log(
                    "structure",
                    "Ignoring %s, only simple properties can be attributes",
                    key,
                )
                continue

            value = self._validate(descriptor, value, True, key)
            if value is not None:
                self._results.set(descriptor.group, descriptor.name, value)

    def _read_leaf_attributes(self, frame: ParseFrame, attrib: Any) -> None:
        """Reads attributes of an element holding a simple value."""
        for key, value in attrib.items():
            namespace, local = split_clark(key) or ("", key)
            if namespace == NS_RDF and local == "parseType":
                if value == "Resource":
                    frame.qualified = True
                    frame.needs_value = True
            elif namespace == NS_RDF and local in ("resource", "value"):
                frame.value = value
            else:
                self._note_qualifier(namespace, local)

    def _read_struct_attributes(self, frame: ParseFrame, attrib: Any) -> None:
        """Stores struct members given as attributes."""
        for key, value in attrib.items():
            name = split_clark(key)
            if name is None or name[0] in (NS_RDF, NS_XML):
                continue
            namespace, local = name

            member = self._member_descriptor(frame, namespace, local)
            if member is None:
                continue
            if member.shape is not Shape.SIMPLE:
                self._log(
                    "structure",
                    "Ignoring struct member %s, only simple members can be "
                    "attributes",
                    key,
                )
                continue

            value = self._validate(member, value, True, key)
            if value is not None:
                frame.value[member.name] = value

    def _member_descriptor(
        self, frame: ParseFrame, namespace: str, local: str
    ) -> PropertyDescriptor | None:
        struct = frame.descriptor
        if (
            namespace != self._struct_namespace(frame)
            or local not in struct.children
        ):
            self._log(
                "struct_member",
                "Ignoring unrecognized member %s of struct %s",
                _qname(namespace, local),
                struct.name,
            )
            return None
        return self._registry.lookup(namespace, local)

    # Element start, by kind of the parent frame

    def _open_property(
        self,
        namespace: str,
        local: str,
        descriptor: PropertyDescriptor,
        attrib: Any,
        top: int,
    ) -> ParseFrame:
        shape = descriptor.shape
        if shape is Shape.SIMPLE:
            frame = ParseFrame(FrameKind.SIMPLE, namespace, local, descriptor, top=top)
            self._read_leaf_attributes(frame, attrib)
            return frame

        if shape is Shape.STRUCT:
            frame = ParseFrame(
                FrameKind.STRUCT, namespace, local, descriptor, value={}, top=top
            )
            self._read_struct_attributes(frame, attrib)
            return frame

        for key in attrib:
            self._note_qualifier(*(split_clark(key) or ("", key)))
        return ParseFrame(
            FrameKind.CONTAINER,
            namespace,
            local,
            descriptor,
            value={} if shape is Shape.LANG else [],
            top=top,
        )

    def _start_in_root(
        self, parent: ParseFrame | None, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        # x:xmpmeta, rdf:RDF and any foreign wrapper are transparent
        if namespace == NS_RDF and local == "Description":
            self._read_description_attributes(attrib)
            return ParseFrame(FrameKind.DESCRIPTION, namespace, local)
        return ParseFrame(FrameKind.ROOT, namespace, local)

    def _start_in_description(
        self, parent: ParseFrame, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        if namespace == NS_RDF:
            self._log(
                "description_child",
                "Ignoring rdf:%s inside rdf:Description",
                local,
            )
            return self._ignore(namespace, local)

        descriptor = self._registry.lookup(namespace, local)
        if descriptor is None:
            self._log(
                "unknown_element",
                "Ignoring unrecognized element %s",
                _qname(namespace, local),
            )
            return self._ignore(namespace, local)
        if descriptor.struct_part:
            self._log(
                "struct_part",
                "Ignoring struct member %s outside of its struct",
                _qname(namespace, local),
            )
            return self._ignore(namespace, local)

        return self._open_property(
            namespace, local, descriptor, attrib, top=len(self._stack)
        )

    def _start_in_leaf(
        self, parent: ParseFrame, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        if parent.qualified:
            return self._start_in_qualified(parent, namespace, local, attrib)
        if namespace == NS_RDF and local == "Description":
            # rdf:value plus qualifiers; rdf:value attributes land on the leaf
            parent.needs_value = True
            self._read_leaf_attributes(parent, attrib)
            return ParseFrame(
                FrameKind.QUALIFIED,
                namespace,
                local,
                parent.descriptor,
                owner=len(self._stack) - 1,
                top=parent.top,
            )
        self._mismatch(
            parent.top,
            "Unexpected element %s inside simple property %s",
            _qname(namespace, local),
            parent.descriptor.name,
        )
        return self._ignore(namespace, local, top=parent.top)

    def _start_in_qualified(
        self, parent: ParseFrame, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        if parent.kind is FrameKind.QUALIFIED:
            owner = parent.owner
        else:
            owner = len(self._stack) - 1
        if namespace == NS_RDF and local == "value":
            return ParseFrame(
                FrameKind.VALUE,
                namespace,
                local,
                parent.descriptor,
                owner=owner,
                top=parent.top,
            )
        self._note_qualifier(namespace, local)
        return self._ignore(namespace, local, top=parent.top)

    def _start_in_value(
        self, parent: ParseFrame, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        self._mismatch(
            parent.top,
            "Unexpected element %s inside rdf:value",
            _qname(namespace, local),
        )
        return self._ignore(namespace, local, top=parent.top)

    def _start_in_struct(
        self, parent: ParseFrame, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        if namespace == NS_RDF and local == "Description":
            # Members written inside rdf:Description go to the same struct
            body = ParseFrame(
                FrameKind.STRUCT,
                namespace,
                local,
                parent.descriptor,
                value=parent.value,
                owner=len(self._stack) - 1,
                top=parent.top,
            )
            self._read_struct_attributes(body, attrib)
            return body
        if namespace == NS_RDF:
            self._log(
                "struct_member",
                "Ignoring rdf:%s inside struct %s",
                local,
                parent.descriptor.name,
            )
            return self._ignore(namespace, local, top=parent.top)

        member = self._member_descriptor(parent, namespace, local)
        if member is None:
            return self._ignore(namespace, local, top=parent.top)
        return self._open_property(namespace, local, member, attrib, top=parent.top)

    def _start_in_container(
        self, parent: ParseFrame, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        shape = parent.descriptor.shape
        expected = _CONTAINER_ELEMENTS[shape]
        if namespace == NS_RDF and local == expected:
            pass
        elif namespace == NS_RDF and local == "Bag" and shape is Shape.SEQ:
            self._log(
                "bag_for_seq",
                "Accepting rdf:Bag for sequence %s",
                parent.descriptor.name,
                level=logging.DEBUG,
            )
        else:
            self._mismatch(
                parent.top,
                "Expected rdf:%s in %s but got %s",
                expected,
                parent.descriptor.name,
                _qname(namespace, local),
            )
            return self._ignore(namespace, local, top=parent.top)

        return ParseFrame(
            FrameKind.LIST,
            namespace,
            local,
            parent.descriptor,
            value=parent.value,
            owner=len(self._stack) - 1,
            top=parent.top,
        )

    def _start_in_list(
        self, parent: ParseFrame, namespace: str, local: str, attrib: Any
    ) -> ParseFrame:
        if namespace != NS_RDF or local != "li":
            self._mismatch(
                parent.top,
                "Expected rdf:li in %s but got %s",
                parent.descriptor.name,
                _qname(namespace, local),
            )
            return self._ignore(namespace, local, top=parent.top)

        descriptor = parent.descriptor
        owner = len(self._stack) - 1
        if descriptor.shape is Shape.BAGSTRUCT:
            item = ParseFrame(
                FrameKind.STRUCT_ITEM,
                namespace,
                local,
                descriptor,
                value={},
                owner=owner,
                top=parent.top,
            )
            self._read_struct_attributes(item, attrib)
            return item

        if descriptor.shape is Shape.LANG:
            lang = attrib.get(XML_LANG)
            if lang is None or not LANG_CODE_RE.fullmatch(lang):
                self._mismatch(
                    parent.top,
                    "Expected a valid xml:lang attribute in %s, got %r",
                    descriptor.name,
                    lang,
                )
                return self._ignore(namespace, local, top=parent.top)
            item = ParseFrame(
                FrameKind.LANG_ITEM,
                namespace,
                local,
                descriptor,
                lang=lang.lower(),
                owner=owner,
                top=parent.top,
            )
        else:
            item = ParseFrame(
                FrameKind.ITEM, namespace, local, descriptor, owner=owner, top=parent.top
            )
        self._read_leaf_attributes(item, attrib)
        return item

    # Element end, by kind of the closed frame

    def _deliver(self, frame: ParseFrame, value: Any) -> None:
        """Hands a finished value to the enclosing frame or the store."""
        parent = self._stack[-1]
        descriptor = frame.descriptor
        if parent.kind is FrameKind.DESCRIPTION:
            if frame.invalid:
                self._log(
                    "structure",
                    "Dropping %s, it is not structured as expected",
                    descriptor.name,
                )
                return
            self._results.set(descriptor.group, descriptor.name, value)
        elif parent.kind in (FrameKind.STRUCT, FrameKind.STRUCT_ITEM):
            parent.value[descriptor.name] = value
        elif parent.kind is FrameKind.LIST:
            if frame.kind is FrameKind.LANG_ITEM:
                parent.value[frame.lang] = value
            else:
                parent.value.append(value)

    def _end_leaf(self, frame: ParseFrame) -> None:
        if frame.value is not None:
            value = frame.value
        elif frame.needs_value:
            self._log(
                "missing_value",
                "Dropping %s, it has qualifiers but no rdf:value",
                _frame_label(frame),
            )
            return
        else:
            value = "".join(frame.text).strip()
        value = self._validate(frame.descriptor, value, True, _frame_label(frame))
        if value is not None:
            self._deliver(frame, value)

    def _end_value(self, frame: ParseFrame) -> None:
        self._stack[frame.owner].value = "".join(frame.text).strip()

    def _end_struct(self, frame: ParseFrame) -> None:
        if frame.kind is FrameKind.STRUCT and frame.owner is not None:
            return
        if not frame.value:
            self._log(
                "empty_struct",
                "Struct %s has no valid members",
                frame.descriptor.name,
            )
            return
        if frame.kind is FrameKind.STRUCT:
            value = self._validate(
                frame.descriptor, frame.value, False, _frame_label(frame)
            )
            if value is None:
                return
        else:
            value = frame.value
        self._deliver(frame, value)

    def _end_container(self, frame: ParseFrame) -> None:
        value = frame.value
        if not value:
            self._log(
                "empty_container",
                "Dropping empty container %s",
                frame.descriptor.name,
                level=logging.DEBUG,
            )
            return
        if frame.descriptor.shape is Shape.LANG:
            value["_type"] = "lang"
        value = self._validate(frame.descriptor, value, False, _frame_label(frame))
        if value is not None:
            self._deliver(frame, value)


class Reader:
    """One XMP reading session.

    A session can read several complete documents, which accumulate into
    one result, or a single document streamed in fragments. The registry and
    validators may be shared between sessions; the session itself is not
    thread-safe.

    Args:
        registry: Properties to extract.
        validators: Value checks. Defaults to a :class:`ValidatorSet` that
            logs to ``logger``.
        logger: Logger receiving records about skipped content.
        max_depth: Maximum element nesting that is followed.
    """

    def __init__(
        self,
        registry: Registry = DEFAULT_REGISTRY,
        validators: ValidatorSet | None = None,
        logger: logging.Logger | None = None,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._registry = registry
        self._validators = validators or ValidatorSet(self._logger)
        self._max_depth = max_depth
        self._results = ResultStore()
        self._decoder = ChunkDecoder()
        self._doctype = DoctypeScanner()
        self._parser: etree.XMLParser | None = None
        self._extended: ExtendedXMPState | None = None
        self._unsafe = False

    @staticmethod
    def is_supported() -> bool:
        """Returns True if lxml offers the feed parser this reader needs."""
        return hasattr(etree, "XMLParser") and etree.LIBXML_VERSION >= (2, 9, 0)

    @property
    def results(self) -> ResultStore:
        """Raw result store of this session."""
        return self._results

    @property
    def unsafe(self) -> bool:
        """True once a document type declaration was seen."""
        return self._unsafe

    def parse(self, data: bytes, is_final: bool = True) -> bool:
        """Reads a chunk of XMP.

        Args:
            data: Bytes of the document. May be a whole document or the
                next fragment of one.
            is_final: True if ``data`` ends the document. Fragments of one
                document are passed with ``is_final=False`` until the last.

        Returns:
            False if the XML is malformed or the session is unsafe,
            True otherwise.
        """
        if self._unsafe:
            self._log("unsafe", "Refusing to read XMP, session is marked unsafe")
            return False

        try:
            self._feed(data, is_final)
        except UnsafeXMPError as e:
            self._unsafe = True
            self._log("unsafe", "%s", e, level=logging.WARNING)
            self._reset_document()
            return False
        except MalformedXMPError as e:
            self._log("malformed", "XMP parse error: %s", e)
            self._reset_document()
            return False

        if is_final:
            self._reset_document()
        return True

    def parse_extended(self, packet: bytes) -> bool:
        """Reads an Extended XMP packet.

        The packet's GUID has to match ``xmpNote:HasExtendedXMP`` of a
        document read before, and fragments have to arrive in order. When
        the last fragment arrives, the payload is verified and read like
        a document passed to :meth:`parse`.

        Returns:
            True if the packet was accepted, False if it was discarded.
        """
        if self._unsafe:
            self._log(
                "extended", "Refusing extended XMP, session is marked unsafe"
            )
            return False
        if self._parser is not None:
            self._log(
                "extended",
                "Refusing extended XMP while a document is being streamed",
            )
            return False

        marker = self._results.get(Group.SPECIAL, "HasExtendedXMP")
        if not marker:
            self._log("extended", "Got extended XMP without a HasExtendedXMP marker")
            return False

        try:
            fragment = parse_extended_header(packet)
            if self._extended is None or self._extended.guid != marker:
                self._extended = ExtendedXMPState(marker)
            payload = self._extended.add(fragment)
        except ExtendedXMPError as e:
            self._log("extended", "Discarding extended XMP: %s", e)
            self._extended = None
            return False

        if payload is None:
            return True
        self._extended = None
        return self.parse(payload)

    def get_results(self) -> dict[str, dict[str, Any]]:
        """Returns the values extracted so far, keyed by group tag.

        Internal ``xmp-special`` values are folded into the other groups
        and left out. See :meth:`ResultStore.post_processed`.
        """
        return self._results.post_processed()

    def _log(self, check: str, msg: str, *args: Any, level: int = logging.INFO) -> None:
        self._logger.log(level, msg, *args, extra={"xmp_check": check})

    def _new_parser(self) -> etree.XMLParser:
        target = _ParserTarget(
            self._registry,
            self._validators,
            self._results,
            self._logger,
            self._max_depth,
        )
        # Input is always transcoded to UTF-8 before it reaches lxml.
        return etree.XMLParser(
            target=target,
            encoding="utf-8",
            resolve_entities=False,
            no_network=True,
        )

    def _feed(self, data: bytes, is_final: bool) -> None:
        text = self._decoder.decode(data, final=is_final)
        if self._doctype.scan(text):
            raise UnsafeXMPError("XMP data has a document type declaration")

        if self._parser is None:
            self._parser = self._new_parser()
        try:
            if text:
                self._parser.feed(text.encode("utf-8"))
            if is_final:
                self._parser.close()
        except etree.XMLSyntaxError as e:
            raise MalformedXMPError(str(e)) from e

    def _reset_document(self) -> None:
        self._parser = None
        self._decoder.reset()
        self._doctype.reset()


def is_supported() -> bool:
    """Returns True if the XML tokenizer the reader needs is available."""
    return Reader.is_supported()
