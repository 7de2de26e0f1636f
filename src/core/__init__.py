"""Core: configuración, errores, contratos y servicios sin I/O."""
