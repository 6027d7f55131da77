"""Builds a documentation tree from a resolved OpenAPI v3 schema.

Each schema node becomes one DocNode. Children are appended in this order:

  - ``properties``              → one child per property, sorted by name
  - ``items`` (single schema)   → one child labelled ``items``
  - ``items`` (tuple form)      → one child per position, ``items[0]``, ``items[1]``, ...
  - ``additionalProperties``    → ``true`` sets a flag, a schema adds one child

Recursion stops at ``max_depth``: the node past the limit is emitted with
``truncated`` set and no children.
"""

import logging

from crd_doc.anchor_ids import new_generator
from crd_doc.domain.constants import ADDITIONAL_PROPERTIES_LABEL, ITEMS_LABEL
from crd_doc.domain.models import BuildOptions, DocNode, SchemaNode

logger = logging.getLogger(__name__)


class SchemaTreeBuilder:
    """Converts one schema into a DocNode tree.

    A builder owns its anchor id generator, so use one builder per build.

    Args:
        options: Depth limit and anchor style.
        next_id: Anchor id source; a fresh one is created when omitted.
    """

    def __init__(self, options: BuildOptions | None = None, next_id=None) -> None:
        self._options = options or BuildOptions()
        self._next_id = next_id or new_generator(self._options.anchor_style)
        self.truncated_count = 0

    def build(self, schema: SchemaNode, key: str = '') -> DocNode:
        return self._build_node(schema, key, 0)

    def _build_node(self, schema: SchemaNode, key: str, depth: int) -> DocNode:
        node = DocNode(
            key=key,
            id=self._next_id(),
            type_label=schema.type,
            description=schema.description,
            required_fields=sorted(set(schema.required or ())),
            enum_values=list(schema.enum) if schema.enum else None,
            minimum=schema.minimum,
            maximum=schema.maximum,
            format=schema.format,
            pattern=schema.pattern,
            default=schema.default,
            nullable=schema.nullable,
            preserve_unknown_fields=schema.preserve_unknown_fields,
        )

        if depth > self._options.max_depth:
            node.truncated = True
            self.truncated_count += 1
            logger.debug("Truncated %r at depth %d", key, depth)
            return node

        if schema.properties:
            for name in sorted(schema.properties):
                node.children.append(self._build_node(schema.properties[name], name, depth + 1))

        items = schema.items
        if isinstance(items, SchemaNode):
            node.children.append(self._build_node(items, ITEMS_LABEL, depth + 1))
        elif isinstance(items, list):
            for i, entry in enumerate(items):
                node.children.append(self._build_node(entry, f"{ITEMS_LABEL}[{i}]", depth + 1))

        extra = schema.additional_properties
        if isinstance(extra, SchemaNode):
            node.children.append(self._build_node(extra, ADDITIONAL_PROPERTIES_LABEL, depth + 1))
        elif extra is True:
            node.additional_properties_allowed = True

        return node


def build_doc_tree(schema: SchemaNode, options: BuildOptions | None = None, key: str = '') -> DocNode:
    """Build a DocNode tree for ``schema`` with a fresh anchor id space."""
    return SchemaTreeBuilder(options).build(schema, key)
