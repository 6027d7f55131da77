"""Request pipelines: lookup → decode → resolve → build.

Each call builds its own tree with its own anchor id generator, so any
number of requests can run concurrently without sharing state.
"""

import json
import logging

from crd_doc.domain.errors import DecodeError, LookupMiss
from crd_doc.domain.models import BuildOptions, DocPage, RepoListing
from crd_doc.manifest_decoder import decode
from crd_doc.schema_tree import SchemaTreeBuilder
from crd_doc.store import CRDStore
from crd_doc.url_paths import doc_key, parse_gh_path, repo_key
from crd_doc.version_resolver import resolve_storage_version

logger = logging.getLogger(__name__)


def _fetch(store: CRDStore, key: str) -> bytes:
    raw = store.lookup(key)
    if raw is None:
        raise LookupMiss(key)
    return raw


def render_doc(store: CRDStore, path: str, options: BuildOptions | None = None) -> DocPage:
    """Build the documentation page for a single CRD document path.

    Raises:
        InvalidPath, LookupMiss, DecodeError, NoStorageVersion,
        MissingStorageSchema, SchemaNotFound.
    """
    logger.info("Request received: %s", path)
    org, repo, tag = parse_gh_path(path)

    manifest = decode(_fetch(store, doc_key(path)))
    resolved = resolve_storage_version(manifest)

    builder = SchemaTreeBuilder(options)
    root = builder.build(resolved.schema)
    if builder.truncated_count:
        logger.warning("Truncated %d subtrees of %s", builder.truncated_count, path)

    logger.info("Rendered %s %s/%s", manifest.kind, manifest.group, resolved.version)
    return DocPage(
        repo=f"{org}/{repo}",
        tag=tag,
        group=manifest.group,
        version=resolved.version,
        kind=manifest.kind,
        description=resolved.schema.description,
        root=root,
    )


def list_repo(store: CRDStore, org: str, repo: str, tag: str = '') -> RepoListing:
    """Return the CRDs indexed for a repository.

    Raises:
        LookupMiss, DecodeError.
    """
    raw = _fetch(store, repo_key(org, repo, tag))
    try:
        crds = json.loads(raw)
    except ValueError as e:
        raise DecodeError(f"Invalid listing for {org}/{repo}: {e}")
    if not isinstance(crds, dict):
        raise DecodeError(f"Listing for {org}/{repo} is not an object")

    return RepoListing(
        repo=f"{org}/{repo}",
        tag=tag,
        crds={str(k): str(v) for k, v in sorted(crds.items())},
    )
