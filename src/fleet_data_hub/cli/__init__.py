"""Command-line interface for FleetDataHub (``python -m fleet_data_hub.cli``)."""
