# Módulo de servicios
