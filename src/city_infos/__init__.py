"""City Infos: city insights and weather from the City Data API, with user recipes."""

__version__ = "0.1.0"
