"""CRD documentation: resolve a CRD's schema and build a browsable field tree."""

__version__ = '0.1.0'
