"""
Core array types, numeric tolerances and 4ti2 file IO.
"""
