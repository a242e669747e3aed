# Nombre de archivo: __init__.py
# Ubicación de archivo: scripts/__init__.py
# Descripción: Scripts de línea de comandos
