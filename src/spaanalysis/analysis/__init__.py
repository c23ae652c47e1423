"""
Analysis Engine
===============
Curvature, side classification, reference deviation (RMSD) and the t-tests.

Note: This package should be pure Python/NumPy/SciPy and should NOT import matplotlib.
"""
