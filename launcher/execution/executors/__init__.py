"""
Executors: one module per execution category.
"""
