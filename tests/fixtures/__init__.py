"""
Fixtures package for the zendesk2 test suite.
"""
