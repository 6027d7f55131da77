"""JSON output for documentation pages.

Wraps a DocPage in a ``_metadata`` envelope and writes it to a file or
returns it as text.
"""

import json
import os
from datetime import datetime, timezone
from typing import Any

from crd_doc import __version__
from crd_doc.domain.models import DocPage


class TreeDumper:
    """Serializes DocPage trees.

    Args:
        pretty: Whether to pretty-print JSON (default True).
    """

    def __init__(self, pretty: bool = True) -> None:
        self._indent = 2 if pretty else None

    def envelope(self, page: DocPage, source: str = '') -> dict[str, Any]:
        nodes = sum(1 for _ in page.root.walk())
        truncated = sum(1 for n in page.root.walk() if n.truncated)
        return {
            '_metadata': {
                'generator_version': __version__,
                'generated_at': datetime.now(timezone.utc).isoformat(),
                'source': source,
                'total_nodes': nodes,
                'truncated_nodes': truncated,
            },
            **page.to_dict(),
        }

    def dumps(self, page: DocPage, source: str = '') -> str:
        return json.dumps(self.envelope(page, source), indent=self._indent, ensure_ascii=False, default=str)

    def write(self, page: DocPage, path: str, source: str = '') -> None:
        """Write the page as JSON, creating parent directories."""
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.dumps(page, source))
