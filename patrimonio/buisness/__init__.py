"""
Domain layer for the asset management backend.
Contains the loan/return rules, account protection, uniqueness and dependency
policies, and the domain error hierarchy, separated from persistence.
"""
