"""
Absendo calendar pipeline: lesson extraction for school absence forms.
"""

from absendo.shared.utils.version import get_version

__version__ = get_version()
