"""Version metadata for GameRental."""

__app_name__ = "GameRental"
__version__ = "1.0.0"
