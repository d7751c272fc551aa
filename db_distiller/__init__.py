"""DB Distiller: spreadsheet ingestion and filtering for sponsored-agreement proposals."""

__version__ = "0.1.0"
