"""
The MODEL layer contains pure data structures and dataset I/O.
It has NO knowledge of the analysis or of the plots.
"""
