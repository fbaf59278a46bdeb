"""Interfaces/abstracciones del Core.

Por qué:
- El servicio de suscripción depende de `ListStore`, no de un cliente HTTP.
- Los adaptadores (REST, memoria) implementan el contrato.
"""
