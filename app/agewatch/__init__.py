"""agewatch - poll directory trees and report files that are too old."""

__version__ = "0.1.0"
