"""Shared constants for decoding, resolution and tree building."""

# ── Tree building ───────────────────────────────────────────────────────

DEFAULT_MAX_DEPTH = 64

# Ceiling for configurable depth; keeps recursion well below the interpreter limit
MAX_DEPTH_CEILING = 256

ITEMS_LABEL = 'items'
ADDITIONAL_PROPERTIES_LABEL = 'additionalProperties'

ANCHOR_STYLES = ('counter', 'random')
RANDOM_ANCHOR_LENGTH = 10

# ── Decoding ────────────────────────────────────────────────────────────

CRD_KIND = 'CustomResourceDefinition'

# Schema depth below which the decoder keeps node metadata only
MAX_DECODE_DEPTH = 256

# ── Lookup keys ─────────────────────────────────────────────────────────

GITHUB_HOST = 'github.com'
TAG_SEPARATOR = '@'

# ── Environment ─────────────────────────────────────────────────────────

ENV_REDIS_HOST = 'REDIS_HOST'
ENV_REDIS_PORT = 'REDIS_PORT'
ENV_REDIS_DB = 'REDIS_DB'
ENV_DATA_DIR = 'CRD_DOC_DATA_DIR'
ENV_MAX_DEPTH = 'CRD_DOC_MAX_DEPTH'

DEFAULT_REDIS_PORT = 6379
