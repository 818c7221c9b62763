"""
propmatch: matching de clientes y propiedades para el CRM inmobiliario.
"""

__version__ = "0.1.0"
