"""
Core infrastructure: settings, database, auth, errors
"""
