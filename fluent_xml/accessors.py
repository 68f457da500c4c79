"""
Node Accessors Module
Attribute and text access, plus node creation, for possibly-missing nodes
"""
from lxml import etree
from typing import Dict, Optional
import logging

from .path_query import PathQuery

logger = logging.getLogger(__name__)


class NodeAccessors:
    """Every method accepts None for the node and then does nothing"""

    @staticmethod
    def _attribute_key(node, name: str) -> str:
        """Map 'prefix:local' onto the {uri}local key lxml stores attributes under"""
        if ':' in name and not name.startswith('{'):
            prefix, localname = name.split(':', 1)
            uri = node.nsmap.get(prefix)
            if uri is not None:
                return f"{{{uri}}}{localname}"
        return name

    @staticmethod
    def _qualified_attribute_name(node, key: str) -> str:
        qname = etree.QName(key)
        if qname.namespace is None:
            return key
        for prefix, uri in node.nsmap.items():
            if prefix is not None and uri == qname.namespace:
                return f"{prefix}:{qname.localname}"
        return key

    @staticmethod
    def _namespace_declarations(node) -> Dict[str, str]:
        """xmlns attributes written on this node itself, not inherited ones"""
        parent = node.getparent()
        inherited = parent.nsmap if parent is not None else {}
        declarations = {}
        for prefix, uri in node.nsmap.items():
            if inherited.get(prefix) == uri:
                continue
            declarations['xmlns' if prefix is None else f"xmlns:{prefix}"] = uri
        return declarations

    @staticmethod
    def get_attrs(node) -> Dict[str, str]:
        """
        Return a new dict of attribute name -> value

        Attributes come first in document order, followed by the namespace
        declarations made on this node. The dict is a copy; use set_attr to
        change the node.
        """
        attrs = {}
        if node is None or isinstance(node, etree._ElementTree):
            return attrs
        for key, value in node.attrib.items():
            attrs[NodeAccessors._qualified_attribute_name(node, key)] = value
        attrs.update(NodeAccessors._namespace_declarations(node))
        return attrs

    @staticmethod
    def get_attr(node, name: str) -> Optional[str]:
        """Return the value of attribute `name`, or None if the node or attribute is missing"""
        if node is None or isinstance(node, etree._ElementTree):
            return None
        if name == 'xmlns' or name.startswith('xmlns:'):
            return NodeAccessors._namespace_declarations(node).get(name)
        return node.get(NodeAccessors._attribute_key(node, name))

    @staticmethod
    def set_attr(node, name: str, value: str):
        """
        Set attribute `name`, creating it if needed

        An existing attribute keeps its position; a new one is appended.
        Returns the node so calls can be chained.
        """
        if node is None:
            return None
        if isinstance(node, etree._ElementTree):
            raise ValueError(f"Cannot set attribute {name}: documents have no attributes")
        node.set(NodeAccessors._attribute_key(node, name), value)
        logger.debug(f"Set attribute {name}={value!r} on <{PathQuery.node_name(node)}>")
        return node

    @staticmethod
    def get_text(node) -> Optional[str]:
        """Return all text inside the node (its inner text), '' if there is none"""
        if node is None:
            return None
        if isinstance(node, etree._ElementTree):
            node = node.getroot()
        return ''.join(node.itertext())

    @staticmethod
    def set_text(node, value: str):
        """Replace everything inside the node with `value`; returns the node"""
        if node is None:
            return None
        if isinstance(node, etree._ElementTree):
            node = node.getroot()
        for child in list(node):
            node.remove(child)
        node.text = value
        logger.debug(f"Set text of <{PathQuery.node_name(node)}>")
        return node

    @staticmethod
    def new_node(node, tag: str):
        """
        Create a <tag> element, append it to `node` and return it

        The new element takes the namespace of the nearest enclosing element
        that has one, so a child added under a default-namespace document does
        not come out with an empty xmlns="" attribute.
        """
        if node is None:
            return None
        if isinstance(node, etree._ElementTree):
            raise ValueError(f"Cannot add <{tag}>: document already has a root element")

        namespace = None
        current = node
        while current is not None:
            namespace = etree.QName(current).namespace
            if namespace:
                break
            current = current.getparent()

        if namespace:
            child = etree.SubElement(node, f"{{{namespace}}}{tag}")
        else:
            child = etree.SubElement(node, tag)

        logger.debug(f"Created <{tag}> under <{PathQuery.node_name(node)}>")
        return child

    @staticmethod
    def find_or_create_child(node, tag: str):
        """Return the first <tag> under `node`, creating it when there is none"""
        if node is None:
            return None
        existing = PathQuery.find_first(node, tag)
        if existing is not None:
            return existing
        return NodeAccessors.new_node(node, tag)


get_attrs = NodeAccessors.get_attrs
get_attr = NodeAccessors.get_attr
set_attr = NodeAccessors.set_attr
get_text = NodeAccessors.get_text
set_text = NodeAccessors.set_text
new_node = NodeAccessors.new_node
find_or_create_child = NodeAccessors.find_or_create_child
