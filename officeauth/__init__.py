"""officeauth: authorization and tenant-identity core for a multi-tenant tax-office CRM."""

__version__ = "1.0.0"
