"""
HTTP backend for the hybrid text classifier.
"""
