"""
Core domain logic: the recommendation engine and its scoring helpers.
"""
