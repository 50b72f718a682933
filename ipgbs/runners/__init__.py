"""
High-level entry points: computing bases, optimizing with them, and the
4ti2 command-line runner.
"""
