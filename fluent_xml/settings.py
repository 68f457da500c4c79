"""
Parser and writer settings
Defaults match what most callers want: no URI resolution, two-space indent
"""
from lxml import etree
from pydantic import BaseModel
from typing import Optional


class ParserSettings(BaseModel):
    """Options used to build the lxml parser for FluentXmlDocument"""
    resolve_uris: bool = False
    remove_blank_text: bool = True
    huge_tree: bool = False

    def build_parser(self, encoding: Optional[str] = None) -> etree.XMLParser:
        """
        Build an lxml XMLParser for these settings

        With resolve_uris off the parser never loads a DTD, never touches the
        network and leaves entity references alone. Documents that contain
        URI-like text then parse instead of failing on a lookup.

        A given `encoding` overrides whatever the document declares.
        """
        if self.resolve_uris:
            return etree.XMLParser(
                remove_blank_text=self.remove_blank_text,
                huge_tree=self.huge_tree,
                load_dtd=True,
                resolve_entities=True,
                no_network=False,
                encoding=encoding,
            )

        return etree.XMLParser(
            remove_blank_text=self.remove_blank_text,
            huge_tree=self.huge_tree,
            load_dtd=False,
            resolve_entities=False,
            no_network=True,
            encoding=encoding,
        )


class WriterSettings(BaseModel):
    """Options for FluentXmlDocument.to_xml"""
    indent: bool = True
    indent_chars: str = "  "
    encoding: str = "utf-8"
    xml_declaration: bool = True


DEFAULT_PARSER_SETTINGS = ParserSettings()
DEFAULT_WRITER_SETTINGS = WriterSettings()
