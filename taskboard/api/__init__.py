"""
Api package
"""
