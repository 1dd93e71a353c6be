"""
ArtVerse backend: marketplace API for artists and buyers
"""
