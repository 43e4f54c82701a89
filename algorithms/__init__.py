"""
Algorithms package for the Bandwidth Allocator.
Contains ratio computation, ranking and the greedy fractional-knapsack pass.
"""
