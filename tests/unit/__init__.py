"""
PySATL RefDist
==============

Unit tests for the reference distribution families, the characteristic
graph they are resolved through, and the Gaussian process toolkit.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
