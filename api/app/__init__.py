# Nombre de archivo: __init__.py
# Ubicación de archivo: api/app/__init__.py
# Descripción: Aplicación FastAPI del registro y conciliación de incidentes
