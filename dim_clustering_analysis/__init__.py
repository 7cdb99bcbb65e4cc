"""
Clustering accuracy under increasing dimensionality.

Synthetic Gaussian clusters are clustered by a pluggable adapter and scored
against ground truth under the optimal predicted-to-true label bijection.
"""

__version__ = "0.1.0"
