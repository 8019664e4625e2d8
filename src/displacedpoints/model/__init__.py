"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of plotting (Matplotlib) or the scene export (PyVista).
It deals with Classification, Geometry, and I/O.
"""
