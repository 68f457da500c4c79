"""
Path Query Module
Find nodes by tag name, whitespace separated tag path, or arbitrary predicate
"""
from lxml import etree
from typing import Callable, Iterator, List, Optional, Sequence, Union
import logging

logger = logging.getLogger(__name__)

NodeMatcher = Callable[[etree._Element], bool]


class PathQuery:
    """Null-safe, case-insensitive node lookups over an lxml tree"""

    @staticmethod
    def node_name(node) -> Optional[str]:
        """
        Return the element name as written in the document

        <x:foo xmlns:x="..."> gives 'x:foo', a default-namespace <Project>
        gives 'Project'. Never the {uri}local Clark form.
        """
        if node is None or isinstance(node, etree._ElementTree):
            return None
        localname = etree.QName(node).localname
        if node.prefix:
            return f"{node.prefix}:{localname}"
        return localname

    @staticmethod
    def child_nodes(node) -> List[etree._Element]:
        """Return the immediate element children (a document's child is its root)"""
        if node is None:
            return []
        if isinstance(node, etree._ElementTree):
            root = node.getroot()
            return [] if root is None else [root]
        return list(node.iterchildren(tag=etree.Element))

    @staticmethod
    def _descendants(node) -> Iterator[etree._Element]:
        if isinstance(node, etree._ElementTree):
            root = node.getroot()
            if root is None:
                return iter(())
            return root.iter(tag=etree.Element)
        return node.iterdescendants(tag=etree.Element)

    @staticmethod
    def iter_matches(node, predicate: NodeMatcher) -> Iterator[etree._Element]:
        """
        Lazily yield every descendant of `node` that satisfies `predicate`

        Depth-first pre-order, `node` itself excluded. Children of a node are
        searched whether or not the node matched. Stopping iteration early
        stops the traversal, which is what find_first relies on.
        """
        if node is None:
            return
        for element in PathQuery._descendants(node):
            if predicate(element):
                yield element

    @staticmethod
    def _tag_matcher(tag: str) -> NodeMatcher:
        wanted = tag.lower()
        return lambda element: PathQuery.node_name(element).lower() == wanted

    @staticmethod
    def _segments(query: Sequence) -> List[str]:
        """Normalize ('a b c',), (['a', 'b', 'c'],) and ('a', 'b', 'c') into a segment list"""
        if len(query) == 1:
            (single,) = query
            if isinstance(single, str):
                return single.split()
            if isinstance(single, (list, tuple)):
                query = single

        segments = list(query)
        for segment in segments:
            if not isinstance(segment, str):
                raise TypeError(f"Tag path segments must be strings, got {type(segment).__name__}")
        return segments

    @staticmethod
    def _parse_query(query: Sequence) -> Union[NodeMatcher, List[str]]:
        if len(query) == 1 and callable(query[0]):
            return query[0]
        return PathQuery._segments(query)

    @staticmethod
    def find_all(node, *query) -> List[etree._Element]:
        """
        Return all descendants matching the query, in document order

        find_all(node, "dog")                 every <dog> at any depth
        find_all(node, "stuff more thing")    every <thing> under a <more> under a <stuff>
        find_all(node, ["stuff", "thing"])    same as find_all(node, "stuff thing")
        find_all(node, "stuff", "thing")      same again
        find_all(node, lambda n: ...)         every node the predicate accepts

        Path segments are a descendant chain, not parent/child steps.
        """
        if node is None:
            return []

        matcher = PathQuery._parse_query(query)
        if callable(matcher):
            return list(PathQuery.iter_matches(node, matcher))

        if not matcher:
            return []

        nodes = list(PathQuery.iter_matches(node, PathQuery._tag_matcher(matcher[0])))

        # Each further segment searches under every node found so far
        for segment in matcher[1:]:
            segment_matcher = PathQuery._tag_matcher(segment)
            nodes = [
                match
                for found in nodes
                for match in PathQuery.iter_matches(found, segment_matcher)
            ]

        logger.debug(f"find_all {matcher!r} found {len(nodes)} node(s)")
        return nodes

    @staticmethod
    def find_first(node, *query) -> Optional[etree._Element]:
        """
        Return the first descendant matching the query, or None

        A single tag or predicate returns the first pre-order match and stops
        searching there. With several segments ("more thing", or "more",
        "thing") the result is the first <thing> that has a <more> somewhere
        among its ancestors; every segment before the last must appear in the
        ancestor chain in the given order, gaps allowed.
        """
        if node is None:
            return None

        matcher = PathQuery._parse_query(query)
        if callable(matcher):
            return next(PathQuery.iter_matches(node, matcher), None)

        if not matcher:
            return None

        *ancestors, tag = matcher
        matches = PathQuery.iter_matches(node, PathQuery._tag_matcher(tag))
        if ancestors:
            matches = (
                match for match in matches
                if PathQuery.has_ancestor_sequence(match, ancestors)
            )
        return next(matches, None)

    @staticmethod
    def has_ancestor_sequence(node, *tags) -> bool:
        """
        Whether the ancestors of `node`, read from the root down, contain
        `tags` in that order (not necessarily adjacent)
        """
        if node is None:
            return False

        segments = PathQuery._segments(tags)
        if isinstance(node, etree._ElementTree):
            ancestor_names = []
        else:
            ancestor_names = [
                PathQuery.node_name(ancestor).lower()
                for ancestor in node.iterancestors(tag=etree.Element)
            ]
            ancestor_names.reverse()

        # Shared iterator: each tag must be found after the previous one
        remaining = iter(ancestor_names)
        return all(
            any(name == segment.lower() for name in remaining)
            for segment in segments
        )


node_name = PathQuery.node_name
child_nodes = PathQuery.child_nodes
iter_matches = PathQuery.iter_matches
find_all = PathQuery.find_all
find_first = PathQuery.find_first
has_ancestor_sequence = PathQuery.has_ancestor_sequence
