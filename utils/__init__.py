"""
Utilities package for the Bandwidth Allocator.
Contains the logger, JSON scenario loader and interactive input.
"""
