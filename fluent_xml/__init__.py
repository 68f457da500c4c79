"""
fluent-xml
Terse, null-safe helpers for finding, reading and editing lxml documents

    doc = from_string("<toys><dog name='Rex'/></toys>")
    get_attr(find_first(doc, "toys dog"), "name")    # 'Rex'
"""
from .accessors import (
    NodeAccessors,
    find_or_create_child,
    get_attr,
    get_attrs,
    get_text,
    new_node,
    set_attr,
    set_text,
)
from .document import FluentXmlDocument, from_file, from_string, save_to_file, to_xml
from .path_query import (
    PathQuery,
    child_nodes,
    find_all,
    find_first,
    has_ancestor_sequence,
    iter_matches,
    node_name,
)
from .settings import ParserSettings, WriterSettings

__version__ = "1.0.0"

__all__ = [
    "FluentXmlDocument",
    "NodeAccessors",
    "ParserSettings",
    "PathQuery",
    "WriterSettings",
    "child_nodes",
    "find_all",
    "find_first",
    "find_or_create_child",
    "from_file",
    "from_string",
    "get_attr",
    "get_attrs",
    "get_text",
    "has_ancestor_sequence",
    "iter_matches",
    "new_node",
    "node_name",
    "save_to_file",
    "set_attr",
    "set_text",
    "to_xml",
]
