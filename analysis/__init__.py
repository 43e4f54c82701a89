"""
Analysis package for the Bandwidth Allocator.
Contains the allocation trace, metrics/invariant checks and report formatting.
"""
