'''
Contribution Scores Backend Test Suite

Test Modules:
-------------
- test_revision_scanner.py: Window, namespace and author filters; per-author
  aggregation and its invariants
- test_score_combiner.py: Composite score, candidate union, ordering, limits
- test_request_parsing.py: Include-parameter parsing and silent normalization
- test_revision_store.py: SQL text, row mapping, snapshot reads on a mock pool
- test_report.py: compute_report end to end over an in-memory store, presets
- test_api.py: FastAPI endpoints with dependency overrides

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

__all__ = []
