"""
Algebraic building blocks: monomial orders, binomials, support trees,
binomial sets and module signatures.
"""
