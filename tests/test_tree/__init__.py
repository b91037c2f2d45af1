# tests/test_tree/__init__.py

"""
Test suite for pystochopt.tree.

- test_indexer.py: TreeShape sizes and the flat index bijection
- test_builder.py: canonical grid construction
- test_regrid.py: decision-grid projection
- test_weights.py: leaf-descendant weights
- test_utils.py: order-preserving de-duplication
"""
