"""Shared test fixtures."""

import json

import pytest

from crd_doc.store import LocalStore


# ── Sample manifests ────────────────────────────────────────────────────

CERTIFICATE_SCHEMA = {
    'type': 'object',
    'description': 'A Certificate resource.',
    'properties': {
        'spec': {
            'type': 'object',
            'required': ['secretName', 'issuerRef'],
            'properties': {
                'secretName': {'type': 'string', 'description': 'Secret to store the certificate in.'},
                'duration': {'type': 'string', 'format': 'duration'},
                'issuerRef': {
                    'type': 'object',
                    'properties': {
                        'name': {'type': 'string'},
                        'kind': {'type': 'string', 'enum': ['Issuer', 'ClusterIssuer']},
                    },
                },
                'dnsNames': {'type': 'array', 'items': {'type': 'string'}},
                'renewBefore': {'type': 'integer', 'minimum': 0, 'maximum': 720},
            },
        },
        'metadata': {'type': 'object'},
    },
}

V1_CRD = {
    'apiVersion': 'apiextensions.k8s.io/v1',
    'kind': 'CustomResourceDefinition',
    'metadata': {'name': 'certificates.cert-manager.io'},
    'spec': {
        'group': 'cert-manager.io',
        'scope': 'Namespaced',
        'names': {'kind': 'Certificate', 'plural': 'certificates'},
        'versions': [
            {'name': 'v1alpha2', 'served': True, 'storage': False,
             'schema': {'openAPIV3Schema': {'type': 'object', 'description': 'old'}}},
            {'name': 'v1', 'served': True, 'storage': True,
             'schema': {'openAPIV3Schema': CERTIFICATE_SCHEMA}},
        ],
    },
}

V1BETA1_CRD_YAML = """\
apiVersion: apiextensions.k8s.io/v1beta1
kind: CustomResourceDefinition
metadata:
  name: widgets.example.com
spec:
  group: example.com
  version: v1beta1
  names:
    kind: Widget
    plural: widgets
  validation:
    openAPIV3Schema:
      type: object
      description: A Widget.
      properties:
        size:
          type: integer
          minimum: 1
"""

DOC_PATH = 'github.com/jetstack/cert-manager/cert-manager.io/Certificate/v1'


def nested_schema(levels: int) -> dict:
    """An object schema ``levels`` deep, each level holding one ``child`` property."""
    schema: dict = {'type': 'string'}
    for _ in range(levels):
        schema = {'type': 'object', 'properties': {'child': schema}}
    return schema


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def v1_crd_bytes():
    return json.dumps(V1_CRD).encode('utf-8')


@pytest.fixture
def data_dir(tmp_path):
    """A LocalStore data directory holding one repo listing and its documents."""
    root = tmp_path / 'data'
    repo_dir = root / 'github.com' / 'jetstack'
    repo_dir.mkdir(parents=True)

    listing = {'cert-manager.io/Certificate/v1': 'certificates.cert-manager.io'}
    (repo_dir / 'cert-manager.json').write_text(json.dumps(listing), encoding='utf-8')
    (repo_dir / 'cert-manager@v1.0.0.json').write_text(json.dumps(listing), encoding='utf-8')
    (repo_dir / 'broken-listing.json').write_text('["not", "an", "object"]', encoding='utf-8')

    doc_dir = repo_dir / 'cert-manager' / 'cert-manager.io' / 'Certificate'
    doc_dir.mkdir(parents=True)
    (doc_dir / 'v1.json').write_text(json.dumps(V1_CRD), encoding='utf-8')
    (doc_dir / 'v1@v1.0.0.json').write_text(json.dumps(V1_CRD), encoding='utf-8')
    (doc_dir / 'broken.json').write_text('{not: [valid', encoding='utf-8')

    no_storage = json.loads(json.dumps(V1_CRD))
    for version in no_storage['spec']['versions']:
        version['storage'] = False
    (doc_dir / 'nostorage.json').write_text(json.dumps(no_storage), encoding='utf-8')
    return root


@pytest.fixture
def local_store(data_dir):
    return LocalStore(str(data_dir))
