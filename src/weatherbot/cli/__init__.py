"""Command-line interface for WeatherBot."""
