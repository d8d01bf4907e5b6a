"""
The ANALYSIS layer holds the numerical core: regression, correlation,
scales and the zoom/pan transform math. Pure numpy, no Qt.
"""
