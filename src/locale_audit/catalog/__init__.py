"""Resource catalog: culture inference, flattening, duplicate scan and building."""

from locale_audit.catalog.builder import ResourceCatalogBuilder, read_resource_files
from locale_audit.catalog.culture import CultureResolver
from locale_audit.catalog.flatten import flatten

__all__ = ["CultureResolver", "ResourceCatalogBuilder", "flatten", "read_resource_files"]
