"""
FILE: taskboard/__init__.py
PURPOSE: Projects, tasks and to-do entries with a derived per-task status
"""
