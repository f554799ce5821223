"""
GraphQL API for contacts
"""
