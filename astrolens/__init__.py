"""Radial lens distortion of images, its scoring, and related small tools."""

__version__ = "0.1.0"