# pystochopt/constants.py

"""
Constants shared across the tree, sampling and export layers.
"""

# Default tolerance below which consecutive sampled values are merged
DEFAULT_EPSILON = 0.01

# Run-length tag carried by every canonical (uncompressed) node
DEFAULT_DEPTH = 1

# Fill value for grid slots and fallback for missing cluster lookups
DEFAULT_NODE = (0, 0, DEFAULT_DEPTH)

# Seeds are 64-bit
SEED_BITS = 64

# Ancestor-sharing policies for dataset sampling
POLICY_PATH = "path"
POLICY_INDEX = "index"
POLICIES = (POLICY_PATH, POLICY_INDEX)
DEFAULT_POLICY = POLICY_PATH

# joblib worker count used when none is given
DEFAULT_N_JOBS = 1
