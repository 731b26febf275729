"""
Interfaces (ports) shared by every domain.
"""

from erp_core.core.interfaces.repository import IIdGenerator, IRepository, ListFilter, Page

__all__ = ["IRepository", "IIdGenerator", "ListFilter", "Page"]
