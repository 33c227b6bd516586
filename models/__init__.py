from .admin import AdminUser
from .application import Application, ApplicationStatus
from .division import Division, DIVISIONS

__all__ = ["AdminUser", "Application", "ApplicationStatus", "Division", "DIVISIONS"]
