"""npm License Checker - License audit for npm manifest files.

This package resolves the license of every dependency declared across a
directory of package.json manifests by querying the npm registry, and
reports the results to the console and to CSV.
"""

__version__ = "0.1.0"

from npm_license_checker.models import DependencyKind, DependencyRecord

__all__ = [
    "__version__",
    "DependencyKind",
    "DependencyRecord",
]
