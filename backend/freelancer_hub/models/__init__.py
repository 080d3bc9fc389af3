from .base import Base
from .user import User
from .customer import Customer
from .project import Project

__all__ = ["Base", "User", "Customer", "Project"]
