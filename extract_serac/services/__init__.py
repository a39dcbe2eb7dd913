"""
Extraction services: translation, locale selection, flattening and fetching.
"""
