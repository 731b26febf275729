"""
E-commerce Application Layer

Ports (repository and collaborator protocols) and use cases.
"""
