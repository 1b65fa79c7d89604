"""Configuration: run options, constants and package resolution."""

from genmock.config.models import GenerateOptions
from genmock.config.packages import PackageRef, module_import_path, resolve_package

__all__ = [
    "GenerateOptions",
    "PackageRef",
    "module_import_path",
    "resolve_package",
]
