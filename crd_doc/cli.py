"""CLI for crd-doc."""

import argparse
import logging
import os
import sys

from crd_doc.domain.errors import CRDDocError, user_message
from crd_doc.domain.models import BuildOptions, DocPage
from crd_doc.domain.constants import ANCHOR_STYLES
from crd_doc.manifest_decoder import decode
from crd_doc.output.tree_dumper import TreeDumper
from crd_doc.schema_tree import SchemaTreeBuilder
from crd_doc.version_resolver import resolve_storage_version


def document_file(manifest_path: str, options: BuildOptions) -> DocPage:
    """Manifest file -> resolved schema -> DocPage."""
    with open(manifest_path, 'rb') as f:
        manifest = decode(f.read())
    resolved = resolve_storage_version(manifest)
    root = SchemaTreeBuilder(options).build(resolved.schema)
    return DocPage(
        repo='',
        tag='',
        group=manifest.group,
        version=resolved.version,
        kind=manifest.kind,
        description=resolved.schema.description,
        root=root,
    )


def _cmd_tree(args) -> int:
    options = BuildOptions.from_env()
    options = BuildOptions(
        max_depth=args.max_depth if args.max_depth is not None else options.max_depth,
        anchor_style=args.anchors,
    )
    page = document_file(args.manifest, options)
    dumper = TreeDumper(pretty=not args.no_pretty)
    if args.output:
        dumper.write(page, args.output, source=os.path.basename(args.manifest))
        print(f"Output: {args.output}")
    else:
        print(dumper.dumps(page, source=os.path.basename(args.manifest)))
    return 0


def _cmd_versions(args) -> int:
    with open(args.manifest, 'rb') as f:
        manifest = decode(f.read())

    print(f"{manifest.kind} ({manifest.group})")
    if not manifest.versions:
        print(f"  {manifest.version or '-'}  (spec.validation)")
    for v in manifest.versions:
        flags = [flag for flag, on in (('served', v.served), ('storage', v.storage)) if on]
        has_schema = v.schema is not None and v.schema.open_api_v3_schema is not None
        print(f"  {v.name:<12} {','.join(flags) or '-':<15} {'schema' if has_schema else 'no schema'}")

    resolved = resolve_storage_version(manifest)
    print(f"Documented version: {resolved.version or '-'}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog='crd-doc', description='CRD schema documentation')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command')

    # tree command
    tree_parser = subparsers.add_parser('tree', help='Build the documentation tree as JSON')
    tree_parser.add_argument('manifest', help='Path to a CRD manifest (JSON or YAML)')
    tree_parser.add_argument('-o', '--output', help='Write JSON to this file instead of stdout')
    tree_parser.add_argument('--max-depth', type=int, help='Maximum nesting depth (default: 64)')
    tree_parser.add_argument('--anchors', choices=ANCHOR_STYLES, default='counter', help='Anchor id style')
    tree_parser.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')

    # versions command
    versions_parser = subparsers.add_parser('versions', help='List declared versions and the documented one')
    versions_parser.add_argument('manifest', help='Path to a CRD manifest (JSON or YAML)')

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command not in ('tree', 'versions'):
        parser.print_help()
        return 0

    if not os.path.isfile(args.manifest):
        print(f"Error: {args.manifest} not found", file=sys.stderr)
        return 1

    try:
        if args.command == 'tree':
            return _cmd_tree(args)
        return _cmd_versions(args)
    except CRDDocError as e:
        print(f"Error: {user_message(e)} ({e})", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
