"""
CRD Docs — MCP Server.

Exposes CRD schema documentation (the same field trees the web pages
render) to LLM clients via the Model Context Protocol.

Usage:
    # Local mode (reads cached documents from a directory)
    python -m mcp_server --data-dir /path/to/data

    # Redis mode (reads from the indexer's cache)
    python -m mcp_server --redis-host redis.example.internal
"""

from __future__ import annotations

import json
import logging
import sys

from mcp.server.fastmcp import FastMCP

from crd_doc.domain.errors import CRDDocError, user_message
from crd_doc.domain.models import BuildOptions
from crd_doc.service import list_repo, render_doc
from crd_doc.store import CRDStore, LocalStore, RedisStore

logger = logging.getLogger("mcp-server")

# ── Globals ─────────────────────────────────────────────────────────────

_store: CRDStore | None = None
mcp = FastMCP("crd-docs")


def _crd_store() -> CRDStore:
    if _store is None:
        raise RuntimeError("Store not initialized")
    return _store


def _error(e: CRDDocError) -> dict:
    return {"error": e.kind, "message": user_message(e)}


def _truncate(data: dict, max_chars: int = 80_000) -> dict:
    text = json.dumps(data, ensure_ascii=False, default=str)
    if len(text) <= max_chars:
        return data
    return {
        "_truncated": True,
        "_message": f"Response too large ({len(text):,} chars). Use describe_field to drill into a subtree.",
    }


# ── Tools ───────────────────────────────────────────────────────────────


@mcp.tool()
def list_repo_crds(org: str, repo: str, tag: str = "") -> dict:
    """List the CRDs indexed for a GitHub repository.

    Args:
        org: GitHub organization or user.
        repo: Repository name.
        tag: Optional git tag; empty for the default branch.
    """
    try:
        return list_repo(_crd_store(), org, repo, tag).to_dict()
    except CRDDocError as e:
        return _error(e)


@mcp.tool()
def get_crd_doc(path: str) -> dict:
    """Get the full field documentation tree for one CRD.

    Args:
        path: Document path, e.g. "github.com/jetstack/cert-manager/cert-manager.io/Certificate/v1@v1.0.0".
    """
    try:
        page = render_doc(_crd_store(), path, BuildOptions())
    except CRDDocError as e:
        return _error(e)
    return _truncate(page.to_dict())


@mcp.tool()
def describe_field(path: str, field_path: str) -> dict:
    """Get the documentation subtree for one field of a CRD.

    Args:
        path: Document path (as for get_crd_doc).
        field_path: Dotted field path from the root, e.g. "spec.template.items".
    """
    try:
        page = render_doc(_crd_store(), path, BuildOptions())
    except CRDDocError as e:
        return _error(e)
    node = page.root.find(field_path)
    if node is None:
        return {"error": "FieldNotFound", "message": f"Field '{field_path}' not found", "path": path}
    return _truncate(node.to_dict())


# ── Entry point ─────────────────────────────────────────────────────────

def main():
    import argparse

    parser = argparse.ArgumentParser(description="CRD Docs MCP Server")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--data-dir", help="Local directory containing cached documents")
    group.add_argument("--redis-host", help="Redis host holding the document cache")
    parser.add_argument("--redis-port", type=int, default=6379, help="Redis port (default: 6379)")

    args = parser.parse_args()

    global _store
    if args.data_dir:
        try:
            _store = LocalStore(args.data_dir)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        _store = RedisStore(host=args.redis_host, port=args.redis_port)

    logger.info("Serving CRD docs over stdio")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
