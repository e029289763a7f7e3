"""
Search plugins: one module per category.

Every module exposes ``create(config) -> (validator, searcher)``.
"""
