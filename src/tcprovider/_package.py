"""Package metadata and naming constants."""

PACKAGE_NAME = "tencentcloud-resource-provider"
__version__ = "0.1.0"
