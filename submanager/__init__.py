"""
SubManager - family-plan subscription tracker bot.
"""
__version__ = "1.0.0"
