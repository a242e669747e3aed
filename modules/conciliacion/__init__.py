# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/conciliacion/__init__.py
# Descripción: Inicializa el paquete de conciliación de planillas contra incidentes

from .schemas import ResultadoConciliacion
from .service import ArchivoInvalidoError, ConciliacionConfig, conciliar_excel, exportar_resultado

__all__ = [
    "ArchivoInvalidoError",
    "ConciliacionConfig",
    "ResultadoConciliacion",
    "conciliar_excel",
    "exportar_resultado",
]
