"""Fix support: key suggestions and additive resource-file patching."""
