# incentive_tracker/web/__init__.py
"""
Веб-интерфейс (NiceGUI).
"""
