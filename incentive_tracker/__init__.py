# incentive_tracker/__init__.py
"""
Персональный трекер поездок и условий еженедельного бонуса водителя.
"""

__version__ = "3.0.0"
