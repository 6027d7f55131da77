"""Shared data models used across decoding, resolution and tree building."""

import os
from dataclasses import dataclass, field
from typing import Any, Union

from crd_doc.domain.constants import (
    ANCHOR_STYLES,
    DEFAULT_MAX_DEPTH,
    ENV_MAX_DEPTH,
    MAX_DEPTH_CEILING,
)


@dataclass
class SchemaNode:
    """One node of a CRD's OpenAPI v3 validation schema.

    ``items`` is absent (None), a single SchemaNode, or a list of SchemaNode
    (tuple-typed array). ``additional_properties`` is absent (None), a bool,
    or a nested SchemaNode.
    """

    type: str | None = None
    description: str | None = None
    properties: dict[str, 'SchemaNode'] | None = None
    required: list[str] = field(default_factory=list)
    enum: list[Any] | None = None
    minimum: float | int | None = None
    maximum: float | int | None = None
    items: Union['SchemaNode', list['SchemaNode'], None] = None
    additional_properties: Union[bool, 'SchemaNode', None] = None
    format: str | None = None
    pattern: str | None = None
    default: Any = None
    nullable: bool = False
    preserve_unknown_fields: bool = False


@dataclass
class CustomResourceValidation:
    """Wrapper holding the root OpenAPI v3 schema, as CRDs declare it."""

    open_api_v3_schema: SchemaNode | None = None


@dataclass
class SchemaVersion:
    """One entry of a CRD's ``spec.versions`` list."""

    name: str
    served: bool = False
    storage: bool = False
    schema: CustomResourceValidation | None = None


@dataclass
class CRDManifest:
    """The parts of a CustomResourceDefinition the documentation needs."""

    group: str = ''
    kind: str = ''
    name: str = ''
    plural: str = ''
    scope: str = ''
    version: str = ''
    validation: CustomResourceValidation | None = None
    versions: list[SchemaVersion] = field(default_factory=list)


@dataclass
class ResolvedSchema:
    """The schema selected for documentation and the version it came from."""

    schema: SchemaNode
    version: str = ''


@dataclass
class DocNode:
    """One documentable field or structural node of a built tree."""

    key: str
    id: str
    type_label: str | None = None
    description: str | None = None
    required_fields: list[str] = field(default_factory=list)
    enum_values: list[Any] | None = None
    minimum: float | int | None = None
    maximum: float | int | None = None
    format: str | None = None
    pattern: str | None = None
    default: Any = None
    nullable: bool = False
    preserve_unknown_fields: bool = False
    children: list['DocNode'] = field(default_factory=list)
    additional_properties_allowed: bool = False
    truncated: bool = False

    def is_required(self, name: str) -> bool:
        return name in self.required_fields

    def find(self, field_path: str) -> 'DocNode | None':
        """Return the descendant at a dotted key path (e.g. ``spec.items.name``)."""
        node = self
        for part in field_path.split('.'):
            if not part:
                continue
            node = next((c for c in node.children if c.key == part), None)
            if node is None:
                return None
        return node

    def walk(self):
        """Yield this node and every descendant, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        return {
            'key': self.key,
            'id': self.id,
            'typeLabel': self.type_label,
            'description': self.description,
            'requiredFields': list(self.required_fields),
            'enumValues': self.enum_values,
            'minimum': self.minimum,
            'maximum': self.maximum,
            'format': self.format,
            'pattern': self.pattern,
            'default': self.default,
            'nullable': self.nullable,
            'preserveUnknownFields': self.preserve_unknown_fields,
            'additionalPropertiesAllowed': self.additional_properties_allowed,
            'truncated': self.truncated,
            'children': [c.to_dict() for c in self.children],
        }


@dataclass
class BuildOptions:
    """Options controlling a tree build."""

    max_depth: int = DEFAULT_MAX_DEPTH
    anchor_style: str = 'counter'

    def __post_init__(self):
        if not isinstance(self.max_depth, int) or not 0 <= self.max_depth <= MAX_DEPTH_CEILING:
            raise ValueError(f"max_depth must be between 0 and {MAX_DEPTH_CEILING}, got {self.max_depth!r}")
        if self.anchor_style not in ANCHOR_STYLES:
            raise ValueError(f"anchor_style must be one of {', '.join(ANCHOR_STYLES)}, got {self.anchor_style!r}")

    @classmethod
    def from_env(cls) -> 'BuildOptions':
        raw = os.environ.get(ENV_MAX_DEPTH)
        if not raw:
            return cls()
        try:
            max_depth = int(raw)
        except ValueError:
            raise ValueError(f"{ENV_MAX_DEPTH} must be an integer, got {raw!r}")
        return cls(max_depth=max_depth)


@dataclass
class DocPage:
    """Everything a document view shows for one CRD."""

    repo: str
    tag: str
    group: str
    version: str
    kind: str
    description: str | None
    root: DocNode

    @property
    def at(self) -> str:
        return '@' if self.tag else ''

    def to_dict(self) -> dict[str, Any]:
        return {
            'repo': self.repo,
            'tag': self.tag,
            'group': self.group,
            'version': self.version,
            'kind': self.kind,
            'description': self.description,
            'schema': self.root.to_dict(),
        }


@dataclass
class RepoListing:
    """CRDs published by one repository (optionally at a tag)."""

    repo: str
    tag: str
    crds: dict[str, str] = field(default_factory=dict)

    @property
    def at(self) -> str:
        return '@' if self.tag else ''

    @property
    def total(self) -> int:
        return len(self.crds)

    def to_dict(self) -> dict[str, Any]:
        return {
            'repo': self.repo,
            'tag': self.tag,
            'crds': dict(self.crds),
            'total': self.total,
        }
