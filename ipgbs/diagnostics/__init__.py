"""
Run statistics and diagnostic printing.
"""
