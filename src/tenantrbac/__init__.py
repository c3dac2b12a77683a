"""TenantRBAC - tenant-isolated role and permission catalog engine."""

__version__ = "0.1.0"
