"""
The VIEW layer renders expanded point sets (Matplotlib image, PyVista scene).
"""
