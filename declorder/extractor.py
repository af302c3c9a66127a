"""
Extraction of function prototypes and definitions from a parsed file.

Two structural searches drive everything:
  • every ``declaration`` / ``function_definition`` node, in document order
  • the identifier naming a ``function_declarator`` inside such a node

Nodes without a function-declarator identifier (variables, typedefs,
struct declarations, function pointers) are skipped silently.
"""

import logging
from typing import Iterator, Optional

from tree_sitter import Node

from declorder.c_parser import ParsedSource, node_text, walk_all, walk_types
from declorder.models import DeclarationItem, DefinitionItem, Item

logger = logging.getLogger(__name__)

DECLARATION_NODE = "declaration"
DEFINITION_NODE = "function_definition"
FUNCTION_DECLARATOR_NODE = "function_declarator"
STORAGE_CLASS_NODE = "storage_class_specifier"

_ITEM_NODES = {DECLARATION_NODE, DEFINITION_NODE}


def iter_top_level_nodes(root: Node) -> Iterator[Node]:
    """Declaration and function-definition nodes reachable from ``root``."""
    return walk_types(root, _ITEM_NODES)


def find_function_identifier(node: Node) -> Optional[Node]:
    """First identifier used as the declarator of a function declarator."""
    for n in walk_all(node):
        if n.type != FUNCTION_DECLARATOR_NODE:
            continue
        declarator = n.child_by_field_name("declarator")
        if declarator is not None and declarator.type == "identifier":
            return declarator
    return None


def is_file_scoped(node: Node, source: bytes) -> bool:
    """True if a direct child is the ``static`` storage-class specifier."""
    for child in node.children:
        if child.type == STORAGE_CLASS_NODE and node_text(child, source) == "static":
            return True
    return False


def extract_items(parsed: ParsedSource) -> Iterator[Item]:
    """Yield a DeclarationItem or DefinitionItem for each function-shaped node."""
    for node in iter_top_level_nodes(parsed.root):
        if node.type == DECLARATION_NODE:
            ident = find_function_identifier(node)
            if ident is None:
                continue
            yield DeclarationItem(
                identifier=parsed.text(ident),
                location=parsed.location(ident),
                node_location=parsed.location(node),
            )
        else:
            file_scoped = is_file_scoped(node, parsed.source)
            ident = find_function_identifier(node)
            if ident is None:
                logger.debug(
                    "Skipping definition without identifier in %s at row %d",
                    parsed.path, node.start_point[0],
                )
                continue
            yield DefinitionItem(
                identifier=parsed.text(ident),
                location=parsed.location(ident),
                is_file_scoped=file_scoped,
            )
