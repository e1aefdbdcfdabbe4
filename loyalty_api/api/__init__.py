"""
HTTP blueprints for the Loyalty Points API.
"""
