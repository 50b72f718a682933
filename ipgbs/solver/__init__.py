"""
LP/IP models solved with pulp's bundled CBC solver.
"""
