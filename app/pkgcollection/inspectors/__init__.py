"""Package inspectors."""

from pkgcollection.inspectors.base import PackageInspectionError, PackageInspector
from pkgcollection.inspectors.swift import SwiftPackageInspector

__all__ = ["PackageInspectionError", "PackageInspector", "SwiftPackageInspector"]
