"""
The MODEL layer contains pure data structures and data handling.
It has NO knowledge of the GUI (Qt) or the plotting surface (pyqtgraph).
It deals with Records, Fields, Coercion and Dataset I/O.
"""
