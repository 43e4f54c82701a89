"""
Models package for the Bandwidth Allocator.
Contains the demand entry, tagged ratio value and bandwidth pool.
"""
