"""StrategySuite: strategic framework projects with AI idea suggestions."""

__version__ = "0.1.0"
