"""
Mapping between a Tmx document and TMX 1.4b XML text, on top of lxml.
"""
from typing import List, Optional

from lxml import etree

from .errors import MalformedTmxError, TmxSerializationError, UnsupportedTmxVersionError
from .logger import get_logger
from .tmx_obj import TranslationUnit, TranslationVariant

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
SUPPORTED_VERSION = "1.4"
ADMIN_LANG = "en-US"

# Header properties that are written as header attributes instead of <prop>
TOOL_PROPERTIES = ("creationtool", "creationtoolversion")


def version_string(num) -> str:
    """1.4 -> "1.4", 2 -> "2.0"."""
    parts = str(num).split(".")
    integral = parts[0]
    fraction = parts[1] if len(parts) > 1 and parts[1] else "0"
    return f"{integral}.{fraction}"


def _serialize_unit(parent, tu: TranslationUnit):
    tu_node = etree.SubElement(parent, "tu", srclang=tu.source_locale)
    if tu.comment:
        etree.SubElement(tu_node, "note").text = tu.comment
    for name, value in tu.properties.items():
        etree.SubElement(tu_node, "prop", type=name).text = value
    for variant in tu.variants:
        tuv_node = etree.SubElement(tu_node, "tuv")
        tuv_node.set(XML_LANG, variant.locale)
        etree.SubElement(tuv_node, "seg").text = variant.string


def _serialize_header(root, tmx):
    header = etree.SubElement(root, "header")
    header.set("segtype", tmx.segtype)
    header.set("creationtool", tmx.creation_tool())
    header.set("creationtoolversion", tmx.creation_tool_version())
    header.set("adminlang", ADMIN_LANG)
    header.set("srclang", tmx.source_locale)
    header.set("datatype", tmx.datatype)
    if tmx.properties.get("originalFormat"):
        header.set("o-tmf", tmx.properties["originalFormat"])

    for name, value in tmx.properties.items():
        if name in TOOL_PROPERTIES:
            continue
        etree.SubElement(header, "prop", type=name).text = value


def serialize(tmx) -> str:
    """
    Encodes the document as TMX 1.4 xml text.
    Raises TmxSerializationError for text lxml refuses to write, such as
    control characters.
    """
    root = etree.Element("tmx", version=version_string(tmx.version))

    try:
        _serialize_header(root, tmx)
    except ValueError as exc:
        raise TmxSerializationError(f"Cannot write the tmx header: {exc}") from exc

    body = etree.SubElement(root, "body")
    for tu in tmx.get_translation_units():
        # A unit needs a source and at least one target to be useful
        if len(tu.variants) < 2:
            continue
        try:
            _serialize_unit(body, tu)
        except ValueError as exc:
            raise TmxSerializationError(f"Cannot write translation unit {tu.source!r}: {exc}") from exc

    xml = etree.tostring(root, encoding="unicode", pretty_print=True)
    return XML_DECLARATION + xml.rstrip("\n")


def _children(node, localname: str) -> list:
    return [child for child in node if isinstance(child.tag, str) and etree.QName(child).localname == localname]


def _first_child(node, localname: str):
    children = _children(node, localname)
    return children[0] if children else None


def _parse_unit(tu_node, document_locale: str, datatype: str) -> TranslationUnit:
    tu = TranslationUnit(datatype=datatype)
    if tu_node.get("srclang"):
        tu.source_locale = tu_node.get("srclang")

    properties = {}
    for prop in _children(tu_node, "prop"):
        name = prop.get("type")
        if not name:
            logger.warning("Found a prop tag without a type attribute")
            continue
        properties[name] = prop.text or ""
    tu.add_properties(properties)

    note = _first_child(tu_node, "note")
    if note is not None:
        tu.comment = note.text

    source_found = False
    for tuv in _children(tu_node, "tuv"):
        locale = tuv.get(XML_LANG) or tuv.get("lang")
        if not locale:
            logger.warning("Translation variant found without a lang or xml:lang attribute")
            continue
        seg = _first_child(tuv, "seg")
        string = seg.text if seg is not None else None
        if not string:
            continue
        variant = TranslationVariant(locale=locale, string=string)
        tu.add_variant(variant)
        if locale == document_locale:
            tu.source = string
            tu.source_locale = locale
            source_found = True

    if not source_found and tu.variants:
        fallback = next((v for v in tu.variants if v.locale == tu.source_locale), tu.variants[0])
        tu.source = fallback.string
        tu.source_locale = fallback.locale
    return tu


def parse_root(text: str):
    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
    data = text.lstrip() if isinstance(text, bytes) else text.lstrip().encode("utf-8")
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedTmxError(f"TMX text is not well-formed XML: {exc}") from exc
    if etree.QName(root).localname != "tmx":
        raise MalformedTmxError(f"Expected a <tmx> root element, found <{etree.QName(root).localname}>")
    return root


def deserialize(tmx, text: str, strict: bool = False) -> List[TranslationUnit]:
    """
    Parses TMX text into the given document, replacing its units.
    Raises MalformedTmxError for text that is not xml. A version other than
    1.4 leaves the document empty; it is only raised in strict mode.
    """
    root = parse_root(text)
    tmx.clear()

    version = root.get("version")
    if version != SUPPORTED_VERSION:
        logger.error(f"Unknown tmx version {version}. Cannot continue parsing. Can only parse v1.4b files.")
        if strict:
            raise UnsupportedTmxVersionError(version)
        return tmx.get_translation_units()

    tmx.version = float(version)

    header = _first_child(root, "header")
    header_locale: Optional[str] = None
    if header is not None:
        for attr in ("creationtool", "creationtoolversion", "datatype", "segtype"):
            if header.get(attr):
                setattr(tmx, attr, header.get(attr))
        header_locale = header.get("srclang")
        for prop in _children(header, "prop"):
            if not prop.get("type"):
                logger.warning("Found a header prop tag without a type attribute")
                continue
            tmx.add_property(prop.get("type"), prop.text or "")

    body = _first_child(root, "body")
    tu_nodes = _children(body, "tu") if body is not None else []

    if header_locale:
        tmx.source_locale = header_locale
    elif tu_nodes and tu_nodes[0].get("srclang"):
        tmx.source_locale = tu_nodes[0].get("srclang")

    for tu_node in tu_nodes:
        tmx.add_translation_unit(_parse_unit(tu_node, tmx.source_locale, tmx.datatype))

    return tmx.get_translation_units()
