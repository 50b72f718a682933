"""
Integer program data: validation, normalization to equality form and the
truncation (feasibility) filters applied to candidate binomials.
"""
