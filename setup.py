#!/usr/bin/env python
"""
Setup script for stellartools package.
This is provided for backward compatibility with older pip versions.
For modern Python packaging, see pyproject.toml.
"""

from setuptools import setup

if __name__ == "__main__":
    setup()
