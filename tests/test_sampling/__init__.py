# tests/test_sampling/__init__.py

"""
Test suite for pystochopt.sampling.

- test_cluster.py: ClusterCompressor run boundaries, tolerance and map consistency
- test_assign.py: SampleAssigner leaf ownership, seeded windows and sampling passes
"""
