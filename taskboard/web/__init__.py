"""
Web package
"""
