"""
Core domain models, configuration, error taxonomy and the ULP-distance engine.

This package is independent of the float library under test and of the
verification driver.
"""
