"""
Models module for points, edges and vehicle/smoothing configuration.
"""

from .point import Point, Edge, STRAIGHT
from .vehicle import Vehicle, SmoothingSettings

__all__ = ['Point', 'Edge', 'STRAIGHT', 'Vehicle', 'SmoothingSettings']
