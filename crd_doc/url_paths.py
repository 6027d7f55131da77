"""Request path parsing and lookup key construction.

Document paths look like::

    github.com/{org}/{repo}/{group}/{kind}/{version}[@{tag}]

and repository listings like ``github.com/{org}/{repo}[@{tag}]``.
"""

from urllib.parse import unquote, urlsplit

from crd_doc.domain.constants import GITHUB_HOST, TAG_SEPARATOR
from crd_doc.domain.errors import InvalidPath


def split_tag(value: str) -> tuple[str, str]:
    """Split ``name@tag`` into ``(name, tag)``; tag is '' when absent."""
    name, _, tag = value.partition(TAG_SEPARATOR)
    return name, tag


def parse_gh_path(path: str) -> tuple[str, str, str]:
    """Parse a document path into ``(org, repo, tag)``.

    Raises:
        InvalidPath: fewer than four path segments.
    """
    clean = unquote(urlsplit(path).path).strip('/')
    elements = clean.split('/')
    if len(elements) < 4 or not all(elements[:3]):
        raise InvalidPath(f"Invalid document path: {path}")

    _, tag = split_tag(clean)
    org = elements[1]
    repo, _ = split_tag(elements[2])
    return org, repo, tag


def doc_key(path: str) -> str:
    """Lookup key for a document path: the path with surrounding slashes trimmed."""
    return unquote(urlsplit(path).path).strip('/')


def repo_key(org: str, repo: str, tag: str = '') -> str:
    """Lookup key for a repository listing."""
    key = '/'.join([GITHUB_HOST, org, repo])
    if tag:
        key += TAG_SEPARATOR + tag
    return key
