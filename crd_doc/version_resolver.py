"""Selects the single schema to document from a CRD manifest.

A manifest either carries a top-level ``spec.validation`` (legacy
single-version CRDs) or a list of versions of which exactly one is marked
for storage. The storage version's schema is authoritative when several
versions are declared.
"""

from crd_doc.domain.errors import MissingStorageSchema, NoStorageVersion, SchemaNotFound
from crd_doc.domain.models import CRDManifest, ResolvedSchema, SchemaNode


def resolve_storage_version(manifest: CRDManifest) -> ResolvedSchema:
    """Resolve the documentable schema and the version name it belongs to.

    Raises:
        NoStorageVersion: several versions, none marked ``storage``.
        MissingStorageSchema: the storage version declares no schema.
        SchemaNotFound: no OpenAPI v3 schema is reachable.
    """
    validation = manifest.validation
    version_name = manifest.version

    if len(manifest.versions) == 1:
        only = manifest.versions[0]
        version_name = only.name or version_name
        if only.schema is not None:
            validation = only.schema
    elif len(manifest.versions) > 1:
        storage = next((v for v in manifest.versions if v.storage), None)
        if storage is None:
            raise NoStorageVersion(
                f"none of {len(manifest.versions)} versions of {manifest.kind or 'CRD'} is marked for storage"
            )
        if storage.schema is None:
            raise MissingStorageSchema(f"storage version {storage.name} has no schema")
        validation = storage.schema
        version_name = storage.name

    if validation is None or validation.open_api_v3_schema is None:
        raise SchemaNotFound(f"{manifest.kind or 'CRD'} has no openAPIV3Schema")

    return ResolvedSchema(schema=validation.open_api_v3_schema, version=version_name)


def resolve_version(manifest: CRDManifest) -> SchemaNode:
    """Return the root schema node to document."""
    return resolve_storage_version(manifest).schema
