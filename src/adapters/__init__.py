"""Adaptadores: transporte HTTP, codificación/decodificación y fachada de la API."""
