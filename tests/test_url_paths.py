"""Tests for request path parsing and lookup keys."""

import pytest

from crd_doc.domain.errors import InvalidPath
from crd_doc.url_paths import doc_key, parse_gh_path, repo_key, split_tag


class TestParseGhPath:
    """Tests for document path parsing."""

    def test_untagged(self):
        assert parse_gh_path('/github.com/jetstack/cert-manager/cert-manager.io/Certificate/v1') == (
            'jetstack', 'cert-manager', '',
        )

    def test_tagged(self):
        assert parse_gh_path('github.com/jetstack/cert-manager/cert-manager.io/Certificate/v1@v1.0.0') == (
            'jetstack', 'cert-manager', 'v1.0.0',
        )

    def test_percent_encoded_tag(self):
        assert parse_gh_path('/github.com/a/b/c/d%40v2')[2] == 'v2'

    @pytest.mark.parametrize('path', ['', '/', '/github.com', '/github.com/org/repo', '/github.com//repo/x'])
    def test_too_short(self, path):
        with pytest.raises(InvalidPath):
            parse_gh_path(path)


class TestKeys:
    """Tests for lookup key construction."""

    def test_doc_key_trims_slashes(self):
        assert doc_key('/github.com/a/b/c/d@v1/') == 'github.com/a/b/c/d@v1'

    def test_repo_key(self):
        assert repo_key('jetstack', 'cert-manager') == 'github.com/jetstack/cert-manager'
        assert repo_key('jetstack', 'cert-manager', 'v1.0.0') == 'github.com/jetstack/cert-manager@v1.0.0'

    def test_split_tag(self):
        assert split_tag('repo@v1') == ('repo', 'v1')
        assert split_tag('repo') == ('repo', '')
