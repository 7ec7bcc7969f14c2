"""
Core configuration, database, logging and exceptions
"""
