"""
XML Document Module
Load documents from strings or files and write them back out as text
"""
from lxml import etree
from pathlib import Path
from typing import Optional, Union
import copy
import logging
import os
import shutil
import tempfile

from .settings import (
    DEFAULT_PARSER_SETTINGS,
    DEFAULT_WRITER_SETTINGS,
    ParserSettings,
    WriterSettings,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class FluentXmlDocument:
    """
    Helpers for getting an lxml document from a string or a file and back

    Nothing here differs from calling etree.fromstring yourself except the
    parser defaults: URIs and external entities are never resolved, so XML
    that merely looks like it references something still loads.
    """

    @staticmethod
    def from_string(xml: Optional[str], resolve_uris: bool = False,
                    settings: Optional[ParserSettings] = None) -> Optional[etree._ElementTree]:
        """
        Parse an XML string into a document

        Args:
            xml: XML text; None or '' gives None
            resolve_uris: allow DTD loading and entity resolution
            settings: full parser settings, takes precedence over resolve_uris

        Returns:
            The parsed document, or None for empty input

        Raises:
            etree.XMLSyntaxError: the text is not well-formed XML
        """
        if not xml:
            return None

        if settings is None:
            settings = ParserSettings(resolve_uris=True) if resolve_uris else DEFAULT_PARSER_SETTINGS

        # Text is already decoded; its declared encoding no longer applies
        if isinstance(xml, str):
            data, encoding = xml.encode('utf-8'), 'utf-8'
        else:
            data, encoding = xml, None

        try:
            root = etree.fromstring(data, settings.build_parser(encoding=encoding))
        except etree.XMLSyntaxError as e:
            logger.error(f"XML Syntax Error: {e}")
            raise

        return root.getroottree()

    @staticmethod
    def from_file(path: Optional[PathLike], resolve_uris: bool = False,
                  settings: Optional[ParserSettings] = None) -> Optional[etree._ElementTree]:
        """
        Parse the XML file at `path`; None if the path is empty or the file does not exist

        The raw bytes go to lxml, which picks the encoding from a byte order
        mark or the XML declaration.
        """
        if not path:
            return None

        file_path = Path(path)
        if not file_path.is_file():
            logger.warning(f"XML file not found: {file_path}")
            return None

        doc = FluentXmlDocument.from_string(
            file_path.read_bytes(),
            resolve_uris=resolve_uris,
            settings=settings,
        )
        logger.info(f"Loaded XML document from {file_path}")
        return doc

    @staticmethod
    def to_xml(doc, indent: bool = True, settings: Optional[WriterSettings] = None) -> Optional[str]:
        """
        Serialize a document (or element) to text

        The output starts with <?xml version="1.0" encoding="utf-8"?>, is
        indented with two spaces and has surrounding whitespace trimmed.
        The caller's tree is left untouched; indentation is applied to a copy.
        """
        if doc is None:
            return None

        if settings is None:
            settings = DEFAULT_WRITER_SETTINGS if indent else WriterSettings(indent=False)

        if isinstance(doc, etree._ElementTree):
            tree = copy.deepcopy(doc)
        else:
            tree = etree.ElementTree(copy.deepcopy(doc))

        if settings.indent:
            etree.indent(tree, space=settings.indent_chars)

        xml = etree.tostring(tree, encoding='unicode')
        if settings.xml_declaration:
            xml = f'<?xml version="1.0" encoding="{settings.encoding}"?>\n{xml}'

        return xml.strip()

    @staticmethod
    def save_to_file(doc, path: PathLike, settings: Optional[WriterSettings] = None) -> None:
        """
        Write to_xml(doc) to `path`, replacing any existing file

        The text is written to a temporary file next to the target and moved
        into place, so the target never holds a half-written document.
        """
        if doc is None:
            logger.warning(f"No document to save to {path}")
            return

        settings = settings or DEFAULT_WRITER_SETTINGS
        target = Path(path)
        xml = FluentXmlDocument.to_xml(doc, settings=settings)

        fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix='.tmp',
                                         dir=str(target.parent))
        try:
            with os.fdopen(fd, 'w', encoding=settings.encoding, newline='') as f:
                f.write(xml)
            if target.exists():
                shutil.copymode(target, temp_name)
            else:
                os.chmod(temp_name, 0o644)
            os.replace(temp_name, target)
        except Exception:
            Path(temp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Saved XML document to {target}")


from_string = FluentXmlDocument.from_string
from_file = FluentXmlDocument.from_file
to_xml = FluentXmlDocument.to_xml
save_to_file = FluentXmlDocument.save_to_file
