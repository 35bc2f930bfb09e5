"""
Culture Date API 包初始化
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
