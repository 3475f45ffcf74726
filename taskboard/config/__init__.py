"""
Config package
"""
