"""Domain layer: enums, value objects, exceptions, permission policy, branding rules.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""
