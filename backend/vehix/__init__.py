"""Vehix accounts backend package."""
