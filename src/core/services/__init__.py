"""Servicios del Core."""
