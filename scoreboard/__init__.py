"""Ingestion, ranking and refresh loop behind the live scoreboard pages."""
