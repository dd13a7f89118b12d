"""
CCRM: Campus Course Registration Management

Tracks students, courses and their enrollments, enforces registration rules
and produces transcripts and GPA reports.
"""

__version__ = "1.0.0"
__author__ = "CCRM Development Team"
__description__ = "Campus Course Registration Management"
