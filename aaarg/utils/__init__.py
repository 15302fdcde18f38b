# aaarg/utils/__init__.py

"""
Utility modules for aaarg (logging setup).
"""
