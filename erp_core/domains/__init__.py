"""
Bounded contexts of the ERP core.
"""
