"""
Label-driven point displacement.

Expands labeled 3D points into displaced copies whose geometry is selected
from the digits embedded in each label.
"""
