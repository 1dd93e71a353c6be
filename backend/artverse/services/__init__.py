"""
Service Layer - Business rules spanning several repositories
"""
