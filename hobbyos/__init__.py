"""Kernel building blocks, application models and text tools of a small hobby operating system."""

__version__ = "0.1.0"