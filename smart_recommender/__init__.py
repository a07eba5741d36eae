"""Smart Recommender — rank items from a user's interaction history."""

__version__ = "0.1.0"
