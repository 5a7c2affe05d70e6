"""Test suite for filedatacache.

Test Structure:
- unit/: Unit tests for individual components
  - caching/: Keys, record codec, filesystem store, cached_metadata
  - scan/: Histograms and the concurrent summary/prune scan
  - config/, io/, utils/, cli/: Supporting layers and the fdc command
- integration/: End-to-end workflows against real temp directories
- conftest.py: Shared fixtures and test configuration
"""
