"""
oratest – fixture loading and test helpers for the Oracle driver test suite.
"""
__version__ = "0.4.0"
