"""
A small, namespace-agnostic view of an XML document.

Device descriptions in the wild mix default namespaces, vendor prefixes and
prefixes that are never declared at all (`<device:friendlyName>`). Rather than
matching on qualified names, every tag and attribute name is reduced to its
local part while the tree is built, so the rest of the package only ever
compares plain names like `serviceType`.
"""
from lxml import etree

from .errors import DescriptionParseError


class Text(object):
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return "<Text %r>" % self.value


class Element(object):
    __slots__ = ("name", "attributes", "children")

    def __init__(self, name, attributes=None, children=None):
        self.name = name
        self.attributes = attributes if attributes is not None else {}
        self.children = children if children is not None else []

    def __repr__(self):
        return "<Element '%s'>" % self.name

    @property
    def elements(self):
        return [c for c in self.children if isinstance(c, Element)]

    @property
    def text(self):
        return "".join(c.value for c in self.children if isinstance(c, Text))

    def find(self, name):
        """
        Return the first direct child element called `name`, or None.
        """
        for child in self.elements:
            if child.name == name:
                return child
        return None

    def findtext(self, name, default=None):
        child = self.find(name)
        if child is None:
            return default
        return child.text

    def field(self, name):
        """
        Value of `name` on this element, looked up as an attribute first and
        then as a child element's text. Stripped, or None if absent.
        """
        value = self.attributes.get(name)
        if value is None:
            value = self.findtext(name)
        if value is None:
            return None
        return value.strip()


def local_name(name):
    """
    Strip a Clark-notation `{uri}` and/or a `prefix:` qualifier from `name`.
    """
    if name.startswith("{"):
        name = name.split("}", 1)[-1]
    return name.rsplit(":", 1)[-1]


def _append_text(children, value):
    if value and value.strip():
        children.append(Text(value))


def _build(node):
    attributes = dict((local_name(k), v) for k, v in node.attrib.items())
    children = []
    _append_text(children, node.text)
    for child in node:
        # Comments and processing instructions have a callable tag.
        if isinstance(child.tag, str):
            children.append(_build(child))
        _append_text(children, child.tail)
    return Element(local_name(node.tag), attributes, children)


# Prefixes that are used without being declared are common in device
# descriptions and are the only parse errors tolerated.
_TOLERATED_ERRORS = frozenset(["NS_ERR_UNDEFINED_NAMESPACE"])


def _make_parser():
    return etree.XMLParser(
        recover=True,
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def _check_errors(error_log):
    for entry in error_log:
        if entry.level >= etree.ErrorLevels.ERROR and entry.type_name not in _TOLERATED_ERRORS:
            raise DescriptionParseError(
                "Unable to parse XML: %s (line %d)" % (entry.message, entry.line))


def parse(data):
    """
    Parse `data` (bytes or str) into an `Element` tree with every name reduced
    to its local part. Raises DescriptionParseError if the document isn't
    well-formed. Undeclared namespace prefixes are the one thing let through.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not data or not data.strip():
        raise DescriptionParseError("Empty XML document")
    parser = _make_parser()
    try:
        root = etree.fromstring(data, parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise DescriptionParseError("Unable to parse XML: %s" % exc) from exc
    _check_errors(parser.error_log)
    if root is None:
        raise DescriptionParseError("Unable to parse XML: no document element")
    return _build(root)


def iter_elements(node):
    """
    Depth-first, document-order walk over `node` and every element below it.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.elements))


def find_first(node, predicate):
    """
    Return the first element (in document order) under and including `node`
    that satisfies `predicate`, or None. First match wins.
    """
    if node is None:
        return None
    for element in iter_elements(node):
        if predicate(element):
            return element
    return None


def find_service(node, service_type_prefix):
    """
    Find the first service element whose `serviceType` starts with
    `service_type_prefix`.
    """

    def matches(element):
        service_type = element.field("serviceType")
        return service_type is not None and service_type.startswith(service_type_prefix)

    return find_first(node, matches)
