"""
Storage package
"""
