"""
Bloom knowledge base.

Contains static clinical reference data:
- WHO infant growth standards (0-24 months)
"""
