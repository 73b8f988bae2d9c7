"""Infraestructura: persistencia en Redis y logging estructurado."""
