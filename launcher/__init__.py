"""
Spark Launcher - keystroke-driven launcher core.

    query → recognizers → searchers → ranked results → execute → usage counts
"""

__version__ = "1.0.0"
