"""User interface package.

presenter and services are toolkit-free; the qt_* modules, main_window and
app require PySide6.
"""
