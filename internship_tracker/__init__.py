"""Internship Hours Tracker - log direct and indirect counseling hours per week"""

__version__ = "1.0.0"
