"""Decodes raw CRD bytes (JSON or YAML) into a CRDManifest.

Handles both ``apiextensions.k8s.io/v1beta1`` CRDs (``spec.validation``,
``spec.version``) and ``v1`` CRDs (``spec.versions[].schema``). Absent
optional fields decode to None or empty values; fields present with the
wrong shape raise DecodeError naming the schema path.
"""

import json
import logging
from typing import Any

import yaml

from crd_doc.domain.constants import CRD_KIND, MAX_DECODE_DEPTH
from crd_doc.domain.errors import DecodeError
from crd_doc.domain.models import CRDManifest, CustomResourceValidation, SchemaNode, SchemaVersion

logger = logging.getLogger(__name__)

# Segments kept on each side when a schema path is shortened for messages.
PATH_EDGE_SEGMENTS = 3


def decode(raw: bytes | str) -> CRDManifest:
    """Decode manifest bytes into a CRDManifest.

    Raises:
        DecodeError: bytes are not a CRD document.
    """
    try:
        text = raw.decode('utf-8') if isinstance(raw, bytes) else raw
        doc = _load(text)
    except (UnicodeDecodeError, yaml.YAMLError, RecursionError) as e:
        raise DecodeError(f"Failed to parse manifest: {e}")

    if not isinstance(doc, dict):
        raise DecodeError('Manifest is not a mapping')
    kind = doc.get('kind')
    if kind is not None and kind != CRD_KIND:
        raise DecodeError(f"Expected kind {CRD_KIND}, got {kind}")

    try:
        return ManifestDecoder().decode_document(doc)
    except RecursionError:
        raise DecodeError('Manifest is nested too deeply')


def _load(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return yaml.safe_load(text)


def _abbreviate(path: str) -> str:
    segments = path.split('.')
    if len(segments) <= 2 * PATH_EDGE_SEGMENTS + 1:
        return path
    return '.'.join(segments[:PATH_EDGE_SEGMENTS]) + '...' + '.'.join(segments[-PATH_EDGE_SEGMENTS:])


class ManifestDecoder:
    """Converts a parsed CRD document into domain models."""

    def decode_document(self, doc: dict[str, Any]) -> CRDManifest:
        metadata = self._mapping(doc.get('metadata'), 'metadata')
        spec = self._mapping(doc.get('spec'), 'spec')
        names = self._mapping(spec.get('names'), 'spec.names')

        versions = []
        for i, raw_version in enumerate(self._list(spec.get('versions'), 'spec.versions')):
            versions.append(self._decode_version(raw_version, f"spec.versions[{i}]"))

        return CRDManifest(
            group=self._str(spec.get('group')),
            kind=self._str(names.get('kind')),
            name=self._str(metadata.get('name')),
            plural=self._str(names.get('plural')),
            scope=self._str(spec.get('scope')),
            version=self._str(spec.get('version')),
            validation=self._decode_validation(spec.get('validation'), 'spec.validation'),
            versions=versions,
        )

    def _decode_version(self, raw: Any, path: str) -> SchemaVersion:
        if not isinstance(raw, dict):
            raise DecodeError(f"{_abbreviate(path)} is not a mapping")
        return SchemaVersion(
            name=self._str(raw.get('name')),
            served=self._bool(raw.get('served'), f"{path}.served"),
            storage=self._bool(raw.get('storage'), f"{path}.storage"),
            schema=self._decode_validation(raw.get('schema'), f"{path}.schema"),
        )

    def _decode_validation(self, raw: Any, path: str) -> CustomResourceValidation | None:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise DecodeError(f"{_abbreviate(path)} is not a mapping")
        root = raw.get('openAPIV3Schema')
        if root is None:
            return CustomResourceValidation()
        return CustomResourceValidation(
            open_api_v3_schema=self.decode_schema(root, f"{path}.openAPIV3Schema"),
        )

    def decode_schema(self, raw: Any, path: str = '$', depth: int = 0) -> SchemaNode:
        """Decode one schema mapping and everything nested under it.

        A null schema decodes to an empty node. Past ``MAX_DECODE_DEPTH`` only
        the node's own metadata is kept; the tree builder truncates there.
        """
        if raw is None:
            return SchemaNode()
        if not isinstance(raw, dict):
            raise DecodeError(f"{_abbreviate(path)} is not a mapping")

        node = self._decode_metadata(raw, path)
        if depth > MAX_DECODE_DEPTH:
            logger.debug("Stopped decoding below %s at depth %d", _abbreviate(path), depth)
            return node

        if raw.get('properties') is not None:
            props = self._mapping(raw['properties'], f"{path}.properties")
            node.properties = {
                str(name): self.decode_schema(value, f"{path}.properties.{name}", depth + 1)
                for name, value in props.items()
            }

        raw_items = raw.get('items')
        if isinstance(raw_items, list):
            node.items = [
                self.decode_schema(entry, f"{path}.items[{i}]", depth + 1)
                for i, entry in enumerate(raw_items)
            ]
        elif raw_items is not None:
            node.items = self.decode_schema(raw_items, f"{path}.items", depth + 1)

        additional = raw.get('additionalProperties')
        if isinstance(additional, dict):
            node.additional_properties = self.decode_schema(additional, f"{path}.additionalProperties", depth + 1)
        elif additional is not None and not isinstance(additional, bool):
            raise DecodeError(f"{_abbreviate(path)}.additionalProperties must be a boolean or a schema")
        else:
            node.additional_properties = additional

        return node

    def _decode_metadata(self, raw: dict, path: str) -> SchemaNode:
        enum = raw.get('enum')
        if enum is not None and not isinstance(enum, list):
            raise DecodeError(f"{_abbreviate(path)}.enum is not a list")

        return SchemaNode(
            type=self._optional_str(raw.get('type')),
            description=self._optional_str(raw.get('description')),
            required=[str(r) for r in self._list(raw.get('required'), f"{path}.required")],
            enum=enum,
            minimum=self._number(raw.get('minimum'), f"{path}.minimum"),
            maximum=self._number(raw.get('maximum'), f"{path}.maximum"),
            format=self._optional_str(raw.get('format')),
            pattern=self._optional_str(raw.get('pattern')),
            default=raw.get('default'),
            nullable=self._bool(raw.get('nullable'), f"{path}.nullable"),
            preserve_unknown_fields=self._bool(
                raw.get('x-kubernetes-preserve-unknown-fields'),
                f"{path}.x-kubernetes-preserve-unknown-fields",
            ),
        )

    @staticmethod
    def _bool(value: Any, path: str) -> bool:
        if value is None:
            return False
        if not isinstance(value, bool):
            raise DecodeError(f"{_abbreviate(path)} is not a boolean")
        return value

    @staticmethod
    def _mapping(value: Any, path: str) -> dict:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise DecodeError(f"{_abbreviate(path)} is not a mapping")
        return value

    @staticmethod
    def _list(value: Any, path: str) -> list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DecodeError(f"{_abbreviate(path)} is not a list")
        return value

    @staticmethod
    def _number(value: Any, path: str) -> float | int | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodeError(f"{_abbreviate(path)} is not a number")
        return value

    @staticmethod
    def _str(value: Any) -> str:
        return '' if value is None else str(value)

    @staticmethod
    def _optional_str(value: Any) -> str | None:
        return None if value is None else str(value)
