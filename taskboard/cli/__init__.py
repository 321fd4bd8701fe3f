"""
FILE: taskboard/cli/__init__.py
PURPOSE: Command-line interface package
"""
