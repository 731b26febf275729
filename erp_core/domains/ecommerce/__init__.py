"""
E-commerce bounded context: catalog, customers and the order lifecycle.
"""
