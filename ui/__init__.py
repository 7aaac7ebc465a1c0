"""
User-facing surfaces of the hybrid text classifier.
"""
