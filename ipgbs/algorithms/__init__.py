"""
Gröbner basis algorithm engine: critical pairs, pair queues, the algorithm
interface, the generic main loop and its two variants.
"""
